"""
Test Suite

This module contains all tests for the flowgate workflow engine.

Structure:
    tests/
    ├── __init__.py         # This file
    ├── conftest.py         # Pytest fixtures
    └── unit/               # Unit tests
        ├── __init__.py
        ├── test_domain/    # Models and errors
        ├── test_engine/    # Validator, guards, engine
        └── test_utils/     # Logging and settings

To run tests:
    pytest tests/
    pytest tests/unit/test_engine/
"""
