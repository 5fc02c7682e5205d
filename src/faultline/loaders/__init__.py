"""Scope-bound payload loaders."""

from .info_loader import InfoLoader, on_error, preload

__all__ = ["InfoLoader", "on_error", "preload"]
