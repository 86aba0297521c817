"""
Unit Tests for Amazons Engine

This package contains unit tests for all engine components.

Running Tests:
    # Run all tests
    pytest tests/

    # Run specific test file
    pytest tests/test_movegen.py

    # Run specific test
    pytest tests/test_movegen.py::TestGenerateMoves::test_opening_move_count

Dependencies:
    - pytest: Test framework
"""
