"""Sparkle: ratings and news service for a sparkling-water review site."""

__version__ = "0.1.0"
