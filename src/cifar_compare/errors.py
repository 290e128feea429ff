"""Exceptions raised by the classification pipeline."""

from __future__ import annotations


class ClassificationError(Exception):
    """Base class for classification pipeline failures."""


class PreconditionError(ClassificationError, ValueError):
    """Input violates the pipeline contract (e.g. wrong pixel buffer size)."""


class ModelLoadError(ClassificationError):
    """A model artifact could not be loaded into a handle."""

    def __init__(self, model_name: str, message: str) -> None:
        super().__init__(f"Failed to load model '{model_name}': {message}")
        self.model_name = model_name


class InferenceError(ClassificationError):
    """A loaded model failed while running inference."""

    def __init__(self, model_name: str, message: str) -> None:
        super().__init__(f"Inference failed for model '{model_name}': {message}")
        self.model_name = model_name
