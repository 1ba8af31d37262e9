"""
Top-level package for the Blog & Travel Tracker API.

The package provides no public exports; all functionality lives in
submodules under ``app``.
"""

__all__ = []
