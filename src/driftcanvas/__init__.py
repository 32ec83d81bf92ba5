"""Animated canvas of prompt-generated image cards."""
__version__ = "0.1.0"
