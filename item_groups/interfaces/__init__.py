"""Shared interfaces for coded value sources."""

from .repository import CodedValueRepository

__all__ = ["CodedValueRepository"]
