"""Shared pytest fixtures for cifar_compare tests."""

from __future__ import annotations

import numpy as np
import pytest

from cifar_compare.inference.base import BaseInferenceModel


class StaticLogitsModel(BaseInferenceModel):
    """Fake model returning fixed logits and recording its inputs."""

    def __init__(self, name: str, logits: list[float]) -> None:
        super().__init__(name)
        self.logits = np.asarray(logits, dtype=np.float32)
        self.calls: list[np.ndarray] = []

    def invoke(self, tensor: np.ndarray) -> np.ndarray:
        self.calls.append(tensor)
        return self.logits


class FailingModel(BaseInferenceModel):
    """Fake model whose invocation always raises."""

    def __init__(self, name: str = "broken") -> None:
        super().__init__(name)
        self.calls = 0

    def invoke(self, tensor: np.ndarray) -> np.ndarray:
        self.calls += 1
        raise RuntimeError("shape mismatch on input")


@pytest.fixture()
def gray_pixels() -> np.ndarray:
    """Uniform gray 32x32 RGBA buffer (every sample = 128)."""
    return np.full((32, 32, 4), 128, dtype=np.uint8)


@pytest.fixture()
def random_pixels() -> np.ndarray:
    rng = np.random.default_rng(0)
    return rng.integers(0, 256, (32, 32, 4), dtype=np.uint8)


@pytest.fixture()
def dominant_logits() -> list[float]:
    """Class 0 dominant."""
    return [5.0, 1.0, 1.0, 1.0, 1.0, 1.0, 1.0, 1.0, 1.0, 1.0]


@pytest.fixture()
def make_model() -> type[StaticLogitsModel]:
    return StaticLogitsModel


@pytest.fixture()
def failing_model() -> FailingModel:
    return FailingModel()
