"""Simulated hobby kernel that solves integer quadratic equations typed on its keyboard."""

__version__ = "0.1.0"