"""Version information for tsp."""

__version__ = "1.0.3"
