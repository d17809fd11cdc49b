"""Ports: interfaces implemented by drivers and query builders."""

from __future__ import annotations

from .driver import ResourceDriver
from .query import IQuery

__all__ = ["IQuery", "ResourceDriver"]
