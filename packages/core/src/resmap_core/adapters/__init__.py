"""Adapters: driver decorators."""

from __future__ import annotations

from .logging_driver import LoggingDriver

__all__ = ["LoggingDriver"]
