"""
Logging Setup

One stdout handler configured at import from settings.log_level. Modules
take a child of the "seioracle" logger through get_logger().

Levels:
    DEBUG    - REST and contract-read traces, cache hits
    INFO     - winning source per symbol, lifecycle
    WARNING  - stale-but-accepted or rejected observations
    ERROR    - source failures
"""

import logging
import sys

from core.config import settings

LOG_FORMAT = "%(asctime)s [%(levelname)s] %(name)s: %(message)s"


def _level(name: str) -> int:
    return getattr(logging, name.upper(), logging.INFO)


def setup_logging(log_level: str = "INFO") -> logging.Logger:
    """Configure the root handler and return the "seioracle" logger."""
    logging.basicConfig(
        level=_level(log_level),
        format=LOG_FORMAT,
        datefmt="%Y-%m-%d %H:%M:%S",
        stream=sys.stdout,
        force=True
    )
    root = logging.getLogger("seioracle")
    root.setLevel(_level(log_level))
    return root


logger = setup_logging(settings.log_level)


def get_logger(name: str) -> logging.Logger:
    """
    Child logger under "seioracle".

    Example:
        >>> get_logger("sources.PythSource").name
        'seioracle.sources.PythSource'
    """
    return logging.getLogger(f"seioracle.{name}")


def set_log_level(level: str) -> None:
    logger.setLevel(_level(level))
    logging.getLogger().setLevel(_level(level))


# ============================================
# Trace Helpers
# ============================================

def log_api_request(source: str, url: str, params: dict = None) -> None:
    suffix = f" | Params: {params}" if params else ""
    logger.debug(f"API Request: {source} {url}{suffix}")


def log_api_response(source: str, url: str, status: int, response_time: float = None) -> None:
    time_str = f" | Time: {response_time:.3f}s" if response_time else ""
    logger.debug(f"API Response: {source} {url} | Status: {status}{time_str}")


def log_chain_call(contract: str, function: str, args: tuple = ()) -> None:
    """Trace a view call; bytes arguments are rendered as hex."""
    rendered = ", ".join(a.hex() if isinstance(a, bytes) else str(a) for a in args)
    logger.debug(f"Chain Read: {contract}.{function}({rendered})")
