"""Tiling strategies: linear arrays, sparse grids and nine-patch templates."""
