"""Sobel edge maps for 24-bit BMP frames, used ahead of lane-boundary detection."""

__version__ = "1.0.0"
