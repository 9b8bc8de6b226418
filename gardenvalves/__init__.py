"""Scheduled two-zone garden watering and pool warm-up with a web control panel."""

__version__ = "0.1.0"
__all__ = ["__version__"]