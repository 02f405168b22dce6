"""Escape-time fractal rendering: field evaluation, palettes and rasterization."""
