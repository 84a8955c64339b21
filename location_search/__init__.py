"""Nearby place discovery and ranking."""
