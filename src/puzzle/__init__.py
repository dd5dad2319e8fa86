"""Puzzle harness: per-day part functions and the registry that runs them."""
