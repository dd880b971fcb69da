"""
Test suite for orderrank

Contains:
- tests/unit/          : Unit tests for individual modules
"""
