"""
Top-level package for the Brightidy API.

All functionality lives in submodules under ``app``; import the
application as ``brightidy_api.app.main:app``.
"""

__all__ = []
