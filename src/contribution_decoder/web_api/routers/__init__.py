"""
API Routers
===========
Each router handles a specific domain of the API.
"""
from . import decode, health

__all__ = ["decode", "health"]
