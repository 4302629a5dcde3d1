from __future__ import annotations

from typing import NamedTuple, Optional


FIELD_SEPARATOR = "^"


class CodedValue(NamedTuple):
    """A decoded ``LinkID^Question^...`` record."""

    link_id: str
    question: str


def parse_link_id(raw: Optional[str]) -> str:
    """Return the text before the first caret, or an empty string."""

    if not raw:
        return ""
    link_id, separator, _ = raw.partition(FIELD_SEPARATOR)
    return link_id if separator else ""


def parse_question(raw: Optional[str]) -> str:
    """Return the first field after the first caret, or an empty string."""

    if not raw:
        return ""
    _, separator, rest = raw.partition(FIELD_SEPARATOR)
    if not separator:
        return ""
    return rest.split(FIELD_SEPARATOR, 1)[0]


def decode_coded_value(raw: Optional[str]) -> CodedValue:
    # Malformed records decode to empty fields instead of failing the batch.
    return CodedValue(link_id=parse_link_id(raw), question=parse_question(raw))


__all__ = [
    "CodedValue",
    "FIELD_SEPARATOR",
    "decode_coded_value",
    "parse_link_id",
    "parse_question",
]
