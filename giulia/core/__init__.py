"""Numerical core: iteration loops, smoothing, orbit traps and Newton basins."""
