"""
Cascade Primitive

An ordered sequence of fallback attempts that stops at the first acceptable
result. PriceResolver runs it across the five price adapters, and the YEI
legacy oracle runs it again across its own sub-adapters, so both share one
"try next on failure/invalidity" control flow.

Attempts are awaited strictly in order. An attempt that raises, returns
None, or returns a value rejected by the accept predicate falls through to
the next one. When every attempt fails the cascade returns None.
"""

from typing import Awaitable, Callable, Optional, Sequence, Tuple, TypeVar

from core.logging import get_logger

T = TypeVar("T")

CascadeStep = Tuple[str, Callable[[], Awaitable[Optional[T]]]]
"""(label, zero-argument coroutine factory) pair."""

logger = get_logger(__name__)


async def run_cascade(
    steps: Sequence[CascadeStep],
    accept: Callable[[T], bool],
    context: str = ""
) -> Optional[T]:
    """
    Await each step in order and return the first accepted result.

    Args:
        steps: Ordered (label, factory) pairs; factories are only called when reached
        accept: Predicate a result must pass to stop the cascade
        context: Text added to log lines (usually the symbol)

    Returns:
        The first accepted result, or None if every step failed

    Example:
        >>> steps = [(a.name, partial(a.fetch_quote, "BTC")) for a in adapters]
        >>> quote = await run_cascade(steps, Quote.is_valid, context="BTC")
    """
    for label, factory in steps:
        try:
            result = await factory()
        except Exception as e:
            logger.warning(f"{label} failed{_suffix(context)}: {e}")
            continue

        if result is None:
            logger.debug(f"{label} returned no data{_suffix(context)}")
            continue

        if not accept(result):
            logger.warning(f"{label} returned rejected data{_suffix(context)}: {result!r}")
            continue

        return result

    return None


def _suffix(context: str) -> str:
    return f" for {context}" if context else ""
