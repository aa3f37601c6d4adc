"""Parallel rendering backends."""
