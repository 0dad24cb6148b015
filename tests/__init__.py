"""Test suite for bootmap.

Test organization:
- fixtures/: Project tree generators and importable failure handlers
- unit/: Unit tests for individual modules

Run tests with:
    pytest tests/
    pytest tests/unit/ -v --tb=short
"""
