"""Gym machine recognition from camera frames."""

__version__ = "0.1.0"
