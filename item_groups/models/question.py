from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Dict, Iterator, List


@dataclass(slots=True, frozen=True, eq=False)
class QuestionNode:
    """A questionnaire item positioned by its slash-delimited link id.

    The link id never changes after construction; only ``items`` grows while
    the forest is assembled. Nodes compare by identity, since link ids may
    repeat across a batch.
    """

    link_id: str
    question: str = ""
    items: List["QuestionNode"] = field(default_factory=list)

    @property
    def generation(self) -> int:
        """Nesting level inferred from the number of slashes in the link id."""

        return self.link_id.count("/") - 1

    @property
    def native_id(self) -> str:
        if not self.link_id:
            return ""
        return self.link_id.split("/")[-1]

    @property
    def immediate_parent_id(self) -> str:
        if not self.link_id:
            return ""
        parts = self.link_id.split("/")
        return parts[-2] if len(parts) >= 2 else ""

    @property
    def root_id(self) -> str:
        parts = self.link_id.split("/")
        if len(parts) < 2:
            raise ValueError(f"link id has no root segment: {self.link_id!r}")
        return parts[1]

    def add_item(self, child: "QuestionNode") -> None:
        self.items.append(child)

    def walk(self) -> Iterator["QuestionNode"]:
        """Yield this node and its descendants in pre-order."""

        stack: List["QuestionNode"] = [self]
        while stack:
            node = stack.pop()
            yield node
            stack.extend(reversed(node.items))

    def height(self) -> int:
        """Number of levels in this subtree, counting the node itself."""

        deepest = 0
        stack = [(self, 1)]
        while stack:
            node, level = stack.pop()
            deepest = max(deepest, level)
            stack.extend((child, level + 1) for child in node.items)
        return deepest

    def to_dict(self) -> Dict[str, Any]:
        payload: Dict[str, Any] = {"LinkID": self.link_id, "Question": self.question, "Items": []}
        stack = [(self, payload)]
        while stack:
            node, current = stack.pop()
            for child in node.items:
                child_payload = {"LinkID": child.link_id, "Question": child.question, "Items": []}
                current["Items"].append(child_payload)
                stack.append((child, child_payload))
        return payload


__all__ = ["QuestionNode"]
