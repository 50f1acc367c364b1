"""
Oracle Sources Package

This package contains the upstream clients and the source adapters built on them.

Clients:
- http_client.py: aiohttp JSON client shared by the REST sources
- chain_client.py: web3 AsyncWeb3 reader shared by the on-chain sources

Price adapters (cascade order):
1. yei_multi_oracle.py: YEI Finance per-asset aggregator contracts
2. coingecko.py: CoinGecko simple-price index
3. yei_legacy.py: nested API3 -> Pyth -> Redstone cascade
4. pyth.py: Pyth price feeds on SEI EVM
5. binance.py: Binance last price

Funding adapters (fan-out):
- binance.py, bybit.py, okx.py
"""
