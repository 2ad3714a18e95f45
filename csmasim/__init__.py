"""Simulation of persistent and non-persistent CSMA on a shared channel."""

__version__ = "0.1.0"
__all__ = ["channel", "protocols", "cli"]