"""Logits to ranked class probabilities."""

from __future__ import annotations

from collections.abc import Sequence

import numpy as np

from cifar_compare.config import CIFAR10_CLASSES
from cifar_compare.schemas.prediction import ClassPrediction


def softmax(logits: np.ndarray) -> np.ndarray:  # type: ignore[type-arg]
    """Numerically stable softmax over a 1-D logit vector."""
    logits = np.asarray(logits, dtype=np.float64)
    exp = np.exp(logits - logits.max())
    return exp / exp.sum()


def top_k(
    logits: np.ndarray,  # type: ignore[type-arg]
    k: int,
    labels: Sequence[str] = CIFAR10_CLASSES,
) -> list[ClassPrediction]:
    """Convert raw logits to the ``k`` most probable predictions.

    Sorted by probability descending; equal probabilities keep ascending
    class index order.  ``k`` larger than the number of classes returns
    every class.
    """
    if k < 1:
        raise ValueError(f"k must be >= 1, got {k}")
    logits = np.asarray(logits, dtype=np.float64).reshape(-1)
    if logits.size != len(labels):
        raise ValueError(
            f"Expected {len(labels)} logits (one per label), got {logits.size}"
        )

    probs = softmax(logits)
    order = np.argsort(-probs, kind="stable")[:k]
    return [
        ClassPrediction(class_id=int(idx), label=labels[idx], confidence=float(probs[idx]))
        for idx in order
    ]
