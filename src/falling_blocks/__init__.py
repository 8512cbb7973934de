"""Falling-block puzzle game engine with a pygame frontend."""

__version__ = "0.1.0"
