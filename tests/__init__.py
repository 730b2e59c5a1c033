"""
Test suite for strategy-engine

Contains:
- tests/unit/          : Unit tests for individual modules
"""
