from __future__ import annotations

from typing import Dict, Iterable, List

from item_groups.models.question import QuestionNode


def group_by_root(roots: Iterable[QuestionNode]) -> Dict[str, List[QuestionNode]]:
    """Bucket first-generation nodes by the root segment of their link id.

    Keys keep first-seen order and each bucket keeps the order of ``roots``.
    """

    groups: Dict[str, List[QuestionNode]] = {}
    for node in roots:
        groups.setdefault(node.root_id, []).append(node)
    return groups


__all__ = ["group_by_root"]
