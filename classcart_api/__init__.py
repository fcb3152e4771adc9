"""
Top-level package for the ClassCart API.

All functionality lives in submodules under ``app``; the application
object is importable as ``classcart_api.app.main:app``.
"""

__all__ = []
