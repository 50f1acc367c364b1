"""
Oracle Exceptions

Exceptions raised inside source adapters and clients. None of them reach the
public interface: SourceAdapter.fetch_quote() and FundingSource.fetch_funding_rate()
catch everything and degrade to "no data".
"""


class OracleError(Exception):
    """Base exception for all oracle errors."""


class SourceRequestError(OracleError):
    """Raised when an upstream HTTP request fails (non-200, timeout, bad JSON)."""


class UnsupportedSymbolError(OracleError):
    """Raised when a source has no feed, id or address for a symbol."""


class StaleDataError(OracleError):
    """Raised when an on-chain observation is older than the freshness bound."""


class InvalidPriceError(OracleError):
    """Raised when a source returns a zero, negative or non-finite value."""
