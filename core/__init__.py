"""
Core Package

Contains the source-agnostic core logic of the oracle:
- SourceAdapter / FundingSource: Abstract contracts for every upstream source
- run_cascade: Ordered fallback primitive shared by all price cascades
- PriceResolver: Fixed-priority price cascade with caching
- FundingRateAggregator: Concurrent funding-rate fan-out with caching
- OracleManager: Explicitly constructed owner of all components
- Schemas: Pydantic models for normalized observations (Quote, FundingRate)
"""
