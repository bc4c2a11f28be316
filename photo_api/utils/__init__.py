"""Utility functions for the photo API client."""

from .auth import build_flow

__all__ = ["build_flow"]
