"""Pixels, image buffer, coloring, filters and supersampling."""
