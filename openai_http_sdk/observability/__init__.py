"""Logging helpers."""

from .logging import ClientLogger

__all__ = ["ClientLogger"]
