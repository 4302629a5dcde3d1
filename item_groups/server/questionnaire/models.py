from __future__ import annotations

from typing import Dict, List

from pydantic import BaseModel, ConfigDict, Field

from item_groups.models.question import QuestionNode


class QuestionModel(BaseModel):
    """Wire form of a question; derived link id parts are not exposed."""

    model_config = ConfigDict(populate_by_name=True)

    link_id: str = Field(alias="LinkID")
    question: str = Field(alias="Question")
    items: List["QuestionModel"] = Field(default_factory=list, alias="Items")

    @classmethod
    def from_node(cls, node: QuestionNode) -> "QuestionModel":
        model = cls(link_id=node.link_id, question=node.question)
        stack = [(node, model)]
        while stack:
            current, current_model = stack.pop()
            for child in current.items:
                child_model = cls(link_id=child.link_id, question=child.question)
                current_model.items.append(child_model)
                stack.append((child, child_model))
        return model


QuestionnaireResponse = Dict[str, List[QuestionModel]]


class CodedValuesCreate(BaseModel):
    """Payload for appending raw coded values to a document."""

    values: List[str | None] = Field(min_length=1)
    name: str | None = None


class CodedValuesCreated(BaseModel):
    document_guid: str
    written: int


QuestionModel.model_rebuild()


__all__ = [
    "CodedValuesCreate",
    "CodedValuesCreated",
    "QuestionModel",
    "QuestionnaireResponse",
]
