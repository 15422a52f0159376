"""
Test suite for the comparability engine

Contains:
- tests/unit/          : Unit tests for individual modules
- tests/factories.py   : Record builders shared by the tests
"""
