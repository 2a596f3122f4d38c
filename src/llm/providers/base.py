from __future__ import annotations
from abc import ABC, abstractmethod

class LLMProvider(ABC):
    name = "base"

    @abstractmethod
    def generate(self, *, system: str, user: str) -> str:
        """
        Must return the model output as TEXT (callers parse/validate it themselves).
        """
        raise NotImplementedError
