"""Solar ephemeris and sundial projection for a flat plate of any orientation."""

__version__ = "1.0.0"
