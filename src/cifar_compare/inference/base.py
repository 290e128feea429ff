"""Abstract base class for loaded inference models."""

from __future__ import annotations

from abc import ABC, abstractmethod

import numpy as np


class BaseInferenceModel(ABC):
    """A loaded model handle the orchestrator can invoke.

    Subclasses own their runtime session.  The orchestrator only calls
    ``invoke`` and never inspects the model graph.
    """

    def __init__(self, name: str) -> None:
        self.name = name

    @abstractmethod
    def invoke(self, tensor: np.ndarray) -> np.ndarray:  # type: ignore[type-arg]
        """Run the model on a ``(1, 3, 32, 32)`` float32 tensor.

        Returns the first declared output as a flat logit vector.
        """

    def __repr__(self) -> str:
        return f"{type(self).__name__}(name={self.name!r})"
