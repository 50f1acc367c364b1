"""
Test Suite

Contains unit tests for the oracle core.

Structure:
- tests/unit/: Tests for individual components (schemas, cache, sources, resolver, aggregator, scheduler)
- tests/fakes.py: In-memory doubles for the HTTP client, the chain client and source adapters

Uses pytest with pytest-asyncio for testing async functionality. No test touches the network.
"""
