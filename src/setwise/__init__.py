"""setwise.

Compares two lists of lines as unordered sets after per-line
normalization, and reports differences, unions, intersections and
overlap statistics as text, JSON or CSV.
"""

__version__ = "1.1.0"

__all__ = []
