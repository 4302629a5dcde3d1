"""Questionnaire endpoints."""

from .router import router, get_coded_value_store

__all__ = ["router", "get_coded_value_store"]
