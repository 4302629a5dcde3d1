from __future__ import annotations

from abc import ABC, abstractmethod
from typing import List


class CodedValueRepository(ABC):
    """Source of raw ``LinkID^Question`` records for a client document."""

    @abstractmethod
    def get_coded_values(self, document_guid: str) -> List[str]:
        """Return the coded values for ``document_guid`` in stored order.

        An unknown document yields an empty list rather than an error.
        """


__all__ = ["CodedValueRepository"]
