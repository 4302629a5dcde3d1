"""Decoding and reconstruction of coded questionnaire values."""

from .coded_value import CodedValue, decode_coded_value, parse_link_id, parse_question
from .forest import BuildStats, ForestResult, QuestionForestBuilder
from .grouping import group_by_root
from .pipeline import QuestionnairePipeline, QuestionnaireResult, build_questionnaire

__all__ = [
    "BuildStats",
    "CodedValue",
    "ForestResult",
    "QuestionForestBuilder",
    "QuestionnairePipeline",
    "QuestionnaireResult",
    "build_questionnaire",
    "decode_coded_value",
    "group_by_root",
    "parse_link_id",
    "parse_question",
]
