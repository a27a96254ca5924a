"""
Test suite for liquidity_engine

Contains:
- tests/unit/          : Unit tests for individual modules
"""
