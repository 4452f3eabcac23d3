"""Shared helpers used across tsp."""
