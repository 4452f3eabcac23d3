"""Business logic for tsp."""
