"""
Test suite for yanlib

Contains:
- tests/unit/          : Unit tests for individual modules
"""
