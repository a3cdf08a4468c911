"""Finger-jointed book case generator and laser sheet layout."""

__version__ = "0.1.0"
