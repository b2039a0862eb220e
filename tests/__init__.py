"""
Test suite for fixed-width bit primitives

Contains:
- tests/unit/          : Unit tests for individual modules and golden vectors
"""
