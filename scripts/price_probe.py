#!/usr/bin/env python3
"""
Probe the oracle core from the command line.

Builds an OracleManager from the current .env / environment, resolves a
price and the funding rates for each requested symbol, and prints which
source won. Useful for checking contract addresses and RPC reachability.

Usage examples:
  python scripts/price_probe.py BTC ETH SEI
  python scripts/price_probe.py SEI --no-funding --log-level DEBUG
  python scripts/price_probe.py USDT --network sei-mainnet
"""

import argparse
import asyncio
import sys
from typing import List

from core.config import Settings, validate_configuration
from core.logging import set_log_level
from core.oracle_manager import OracleManager
from core.utils.time import to_utc_datetime


def parse_args() -> argparse.Namespace:
    p = argparse.ArgumentParser(description="Resolve prices and funding rates through the oracle cascade.")
    p.add_argument("symbols", nargs="+", help="Asset tickers (e.g., BTC ETH SEI)")
    p.add_argument("--network", default=None, help="Override SEI_NETWORK (sei-mainnet, sei-testnet)")
    p.add_argument("--no-funding", action="store_true", help="Skip funding-rate queries")
    p.add_argument("--log-level", default=None, help="Override LOG_LEVEL for this run")
    return p.parse_args()


async def probe(symbols: List[str], config: Settings, with_funding: bool) -> int:
    missing = 0
    async with OracleManager(config) as oracle:
        print(f"Cascade: {' -> '.join(oracle.list_sources())}")
        for symbol in symbols:
            quote = await oracle.get_price(symbol)
            if quote is None:
                missing += 1
                print(f"{symbol.upper()}: currently unavailable")
            else:
                observed = to_utc_datetime(quote.timestamp).isoformat()
                print(
                    f"{quote.symbol}: ${quote.price:.4f} "
                    f"({quote.source}, confidence {quote.confidence:.2f}, observed {observed})"
                )

            if with_funding:
                rates = await oracle.get_funding_rates(symbol)
                if rates:
                    joined = ", ".join(f"{r.exchange}: {r.rate * 100:.4f}%" for r in rates)
                    print(f"  funding (annualized): {joined}")
                else:
                    print("  funding: currently unavailable")
    return missing


def main() -> None:
    args = parse_args()

    overrides = {}
    if args.network:
        overrides["sei_network"] = args.network
    config = Settings(**overrides)
    if args.log_level:
        set_log_level(args.log_level)

    try:
        validate_configuration(config)
    except ValueError as e:
        print(f"Configuration error: {e}")
        sys.exit(2)

    missing = asyncio.run(probe(args.symbols, config, with_funding=not args.no_funding))
    sys.exit(1 if missing else 0)


if __name__ == "__main__":
    main()
