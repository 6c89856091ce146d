"""
Test suite for numerics

Contains:
- tests/unit/          : Unit tests for individual modules
- tests/property/      : Property-based tests (Hypothesis)
"""
