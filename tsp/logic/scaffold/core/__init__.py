"""Core scaffold components."""
