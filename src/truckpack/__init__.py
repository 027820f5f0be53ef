"""
truckpack – cargo load planning for a single truck

This package contains the geometry, packing and evaluation logic that
places rectangular cargo boxes inside a truck cargo bay. See the `packers`
subpackage for the placement engine and `utils` for file helpers.
"""

__all__ = []

__version__ = "0.1.0"
