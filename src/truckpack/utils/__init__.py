"""
Utility helpers for the truckpack load planner.

Small, reusable helpers that don't naturally belong in `geometry`,
`evaluation` or `packers`, currently:

- Manifest / layout / saved-load file handling (`io.py`)
"""

__all__ = []
