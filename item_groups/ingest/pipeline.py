from __future__ import annotations

from dataclasses import dataclass
from typing import Dict, Iterable, List, Optional

from item_groups.ingest.forest import BuildStats, QuestionForestBuilder
from item_groups.ingest.grouping import group_by_root
from item_groups.models.question import QuestionNode


@dataclass(slots=True)
class QuestionnaireResult:
    """Grouped forest produced from one batch of coded values."""

    groups: Dict[str, List[QuestionNode]]
    stats: BuildStats

    def to_dict(self) -> Dict[str, List[dict]]:
        return {root_id: [node.to_dict() for node in nodes] for root_id, nodes in self.groups.items()}


class QuestionnairePipeline:
    """Coordinates decoding, forest assembly, and grouping by root."""

    def __init__(self, builder: Optional[QuestionForestBuilder] = None) -> None:
        self.builder = builder or QuestionForestBuilder()

    def run(self, coded_values: Iterable[str]) -> QuestionnaireResult:
        questions = self.builder.build_questions(coded_values)
        forest = self.builder.assemble(questions)
        return QuestionnaireResult(groups=group_by_root(forest.roots), stats=forest.stats)


def build_questionnaire(coded_values: Iterable[str]) -> Dict[str, List[QuestionNode]]:
    """Run the full pipeline and return only the grouped roots."""

    return QuestionnairePipeline().run(coded_values).groups


__all__ = ["QuestionnairePipeline", "QuestionnaireResult", "build_questionnaire"]
