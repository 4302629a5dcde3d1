from __future__ import annotations

import logging
from collections import defaultdict
from dataclasses import dataclass, field
from typing import Dict, Iterable, List

from item_groups.ingest.coded_value import CodedValue, decode_coded_value
from item_groups.models.question import QuestionNode


logger = logging.getLogger(__name__)

ROOT_GENERATION = 1


@dataclass(slots=True)
class BuildStats:
    """Counts collected while assembling one forest."""

    nodes: int = 0
    attached: int = 0
    unmatched: int = 0
    cycles_skipped: int = 0
    roots: int = 0
    dropped: int = 0
    max_nesting: int = 0


@dataclass(slots=True)
class ForestResult:
    roots: List[QuestionNode] = field(default_factory=list)
    stats: BuildStats = field(default_factory=BuildStats)


class QuestionForestBuilder:
    """Rebuild the question hierarchy from a flat list using link ids alone.

    Generations are processed from the deepest up to the first, so every
    subtree is complete before its root is linked to a parent. A child is
    linked to the first node, in input order and at any generation, whose
    native id equals the child's immediate parent id. Children without such
    a node stay unattached and only surface if they are first-generation
    roots themselves.
    """

    def build_questions(self, coded_values: Iterable[str]) -> List[QuestionNode]:
        """Decode raw coded values into unlinked nodes, keeping input order."""

        return [self._to_node(decode_coded_value(raw)) for raw in coded_values]

    def build(self, nodes: Iterable[QuestionNode]) -> List[QuestionNode]:
        """Link ``nodes`` together and return the first-generation roots."""

        return self.assemble(nodes).roots

    def assemble(self, nodes: Iterable[QuestionNode]) -> ForestResult:
        questions = list(nodes)
        stats = BuildStats(nodes=len(questions))
        if not questions:
            return ForestResult(roots=[], stats=stats)

        # First node per native id wins, matching a front-to-back scan.
        index: Dict[str, QuestionNode] = {}
        by_generation: Dict[int, List[QuestionNode]] = defaultdict(list)
        for question in questions:
            index.setdefault(question.native_id, question)
            by_generation[question.generation].append(question)

        # Maps a linked node to a node above it; following it leads to the subtree top.
        tops: Dict[int, QuestionNode] = {}
        max_generation = max(by_generation)
        for generation in range(max_generation, ROOT_GENERATION - 1, -1):
            for child in by_generation.get(generation, ()):
                parent = index.get(child.immediate_parent_id)
                if parent is None:
                    stats.unmatched += 1
                    if generation != ROOT_GENERATION:
                        logger.debug("No parent %r for %r", child.immediate_parent_id, child.link_id)
                    continue
                # An unlinked child is an ancestor of the parent only at the top of its subtree.
                if self._find_top(parent, tops) is child:
                    stats.cycles_skipped += 1
                    logger.debug("Skipping %r under %r: link would form a cycle", child.link_id, parent.link_id)
                    continue
                parent.add_item(child)
                tops[id(child)] = parent
                stats.attached += 1

        roots = list(by_generation.get(ROOT_GENERATION, ()))
        stats.roots = len(roots)
        reachable = {id(node) for root in roots for node in root.walk()}
        stats.dropped = len(questions) - len(reachable)
        stats.max_nesting = max((root.height() for root in roots), default=0)
        logger.debug(
            "Assembled forest: nodes=%s roots=%s attached=%s dropped=%s max_nesting=%s",
            stats.nodes,
            stats.roots,
            stats.attached,
            stats.dropped,
            stats.max_nesting,
        )
        return ForestResult(roots=roots, stats=stats)

    @staticmethod
    def _find_top(node: QuestionNode, tops: Dict[int, QuestionNode]) -> QuestionNode:
        top = node
        while id(top) in tops:
            top = tops[id(top)]
        while node is not top:
            following = tops[id(node)]
            tops[id(node)] = top
            node = following
        return top

    @staticmethod
    def _to_node(value: CodedValue) -> QuestionNode:
        return QuestionNode(link_id=value.link_id, question=value.question)


__all__ = ["BuildStats", "ForestResult", "QuestionForestBuilder", "ROOT_GENERATION"]
