"""Custom base exceptions for the QStash client."""

from __future__ import annotations


class QStashError(Exception):
    """Base class for all QStash exceptions."""
