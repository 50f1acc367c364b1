"""
Background Services Package

- refresh_scheduler.py: periodic cache refresh for the watch-list symbols
"""
