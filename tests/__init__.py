"""
Test package for the truckpack load planner.

This directory collects unit and integration tests for the core modules:

- Geometry primitives (`test_geometry.py`)
- Candidate-corner pool (`test_anchors.py`)
- Greedy packer scenarios and properties (`test_packer.py`)
- Manual overrides (`test_overrides.py`)
- Volume statistics and layout checks (`test_evaluation.py`)
- Cargo ingestion (`test_cargo.py`)
- File helpers and the planner pipeline (`test_io.py`, `test_planner.py`)

You can run tests with:

    pytest
    # or
    python -m pytest

from the project root.
"""

__all__ = []
