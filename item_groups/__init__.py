"""Questionnaire item-group reconstruction package."""

from .models.question import QuestionNode
from .ingest.pipeline import build_questionnaire

__all__ = ["QuestionNode", "build_questionnaire"]
