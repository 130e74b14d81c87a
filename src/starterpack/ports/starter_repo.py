"""Port definitions for starter storage."""

from __future__ import annotations

from abc import ABC, abstractmethod
from typing import List

from starterpack.domain.starter import StarterSource


class StarterRepository(ABC):
    @abstractmethod
    def list_starters(self) -> List[StarterSource]:
        """Return every starter available for packaging, in build order."""
