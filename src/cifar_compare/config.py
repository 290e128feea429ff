"""Pydantic frozen configuration models for cifar_compare."""

from __future__ import annotations

import json
from pathlib import Path

from pydantic import BaseModel, field_validator, model_validator

IMAGE_SIZE = 32
NUM_CHANNELS = 3

CIFAR10_CLASSES: tuple[str, ...] = (
    "plane",
    "car",
    "bird",
    "cat",
    "deer",
    "dog",
    "frog",
    "horse",
    "ship",
    "truck",
)

CIFAR10_MEAN = (0.4914, 0.4822, 0.4465)
CIFAR10_STD = (0.2470, 0.2435, 0.2616)


class NormalizationConfig(BaseModel, frozen=True):
    """Per-channel mean/std used to standardize pixels, in channel order."""

    mean: tuple[float, float, float] = CIFAR10_MEAN
    std: tuple[float, float, float] = CIFAR10_STD

    @field_validator("std")
    @classmethod
    def _std_nonzero(cls, value: tuple[float, float, float]) -> tuple[float, float, float]:
        if any(s == 0 for s in value):
            raise ValueError(f"std values must be non-zero, got {value}")
        return value


class ClassifierConfig(BaseModel, frozen=True):
    """Configuration for a classification request.

    All fields are validated at construction time. Frozen, no mutation after creation.
    ``labels`` is index-aligned with the model's output vector.
    """

    labels: tuple[str, ...] = CIFAR10_CLASSES
    normalization: NormalizationConfig = NormalizationConfig()
    top_k: int = 3

    @model_validator(mode="after")
    def _top_k_in_range(self) -> "ClassifierConfig":
        if not self.labels:
            raise ValueError("labels must not be empty")
        if not 1 <= self.top_k <= len(self.labels):
            raise ValueError(
                f"top_k must be between 1 and {len(self.labels)}, got {self.top_k}"
            )
        return self

    @classmethod
    def from_labels_mapping(
        cls, path: str | Path, top_k: int = 3
    ) -> "ClassifierConfig":
        """Build a config from a ``labels_mapping.json`` sidecar.

        The sidecar holds ``idx_to_class`` (string indices) and, optionally,
        ``normalization.mean`` / ``normalization.std``.  Missing
        normalization falls back to the CIFAR-10 defaults.

        Raises:
            ValueError: If the file is not valid JSON or does not match the
                sidecar layout (``pydantic.ValidationError`` is a ValueError).
        """
        with open(path) as f:
            mapping = LabelsMapping.model_validate(json.load(f))

        idx_to_class = mapping.idx_to_class
        if sorted(idx_to_class) != list(range(len(idx_to_class))):
            raise ValueError(
                f"idx_to_class in {path} must cover indices 0..{len(idx_to_class) - 1}"
            )
        labels = tuple(idx_to_class[i] for i in range(len(idx_to_class)))
        return cls(
            labels=labels,
            normalization=mapping.normalization or NormalizationConfig(),
            top_k=top_k,
        )


class LabelsMapping(BaseModel, frozen=True):
    """Schema of the ``labels_mapping.json`` sidecar shipped next to a model."""

    idx_to_class: dict[int, str]
    normalization: NormalizationConfig | None = None
