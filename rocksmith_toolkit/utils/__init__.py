"""Shared helpers."""

from .binary import BinaryReader, UnexpectedEndOfData

__all__ = ["BinaryReader", "UnexpectedEndOfData"]
