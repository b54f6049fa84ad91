"""
Unit Tests for Tic-tac-toe Engine

This package contains unit tests for all engine components.

Running Tests:
    # Run all tests
    pytest tests/

    # Run specific test file
    pytest tests/test_search.py

    # Run with coverage
    pytest tests/ --cov=tictactoe_engine --cov-report=html

    # Run specific test
    pytest tests/test_search.py::TestSelfPlay::test_optimal_play_draws

Dependencies:
    - pytest: Test framework
    - pytest-cov: Coverage reporting
"""
