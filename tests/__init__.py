"""
Test suite for scaled-decimal

Contains:
- tests/unit/          : Unit tests for individual modules
"""
