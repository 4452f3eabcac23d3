"""Core configuration and logging for tsp."""
