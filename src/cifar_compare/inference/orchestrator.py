"""Run one or two models on a prepared tensor and time each invocation."""

from __future__ import annotations

import time
from collections.abc import Sequence
from typing import Any

import numpy as np
from loguru import logger

from cifar_compare.config import CIFAR10_CLASSES, ClassifierConfig
from cifar_compare.errors import InferenceError, PreconditionError
from cifar_compare.inference.base import BaseInferenceModel
from cifar_compare.postprocess import top_k
from cifar_compare.report import report
from cifar_compare.schemas.prediction import ComparisonResult, InferenceResult
from cifar_compare.transforms.preprocess import preprocess


def run_model(
    model: BaseInferenceModel,
    tensor: np.ndarray,  # type: ignore[type-arg]
    labels: Sequence[str] = CIFAR10_CLASSES,
    k: int = 3,
) -> InferenceResult:
    """Invoke ``model`` once and rank its output.

    Only the ``invoke`` call is timed; ranking happens after the clock stops.

    Raises:
        InferenceError: If the model raises, or returns logits that are not
            one finite value per label.
    """
    start = time.perf_counter()
    try:
        logits = model.invoke(tensor)
    except InferenceError:
        raise
    except Exception as exc:
        raise InferenceError(model.name, str(exc)) from exc
    elapsed_ms = (time.perf_counter() - start) * 1000.0

    logits = np.asarray(logits, dtype=np.float64).reshape(-1)
    if logits.size != len(labels):
        raise InferenceError(
            model.name, f"expected {len(labels)} logits, got {logits.size}"
        )
    if not np.all(np.isfinite(logits)):
        raise InferenceError(model.name, "output contains non-finite logits")

    logger.debug(f"{model.name}: inference took {elapsed_ms:.2f} ms")
    return InferenceResult(
        model_name=model.name,
        predictions=top_k(logits, k, labels),
        elapsed_ms=elapsed_ms,
    )


def compare(
    model_a: BaseInferenceModel,
    model_b: BaseInferenceModel,
    tensor: np.ndarray,  # type: ignore[type-arg]
    labels: Sequence[str] = CIFAR10_CLASSES,
    k: int = 3,
) -> ComparisonResult:
    """Run both models sequentially on the same tensor and compare them.

    A failure in either model aborts the comparison; no partial result is
    returned and ``model_b`` is not run if ``model_a`` fails.
    """
    result_a = run_model(model_a, tensor, labels, k)
    result_b = run_model(model_b, tensor, labels, k)
    return report(result_a, result_b)


def classify(
    pixels: Any,
    models: Sequence[BaseInferenceModel],
    config: ClassifierConfig | None = None,
) -> InferenceResult | ComparisonResult:
    """Classify one 32x32 RGBA pixel buffer with one or two models.

    The tensor is computed once.  With one model the ranked
    ``InferenceResult`` is returned; with two, a ``ComparisonResult`` whose
    baseline is ``models[0]``.

    Raises:
        PreconditionError: If ``models`` does not hold one or two models, or
            the pixel buffer is malformed.  Raised before any inference.
        InferenceError: If a model invocation fails.
    """
    config = config or ClassifierConfig()
    if len(models) not in (1, 2):
        raise PreconditionError(f"Expected 1 or 2 models, got {len(models)}")

    tensor = preprocess(pixels, config.normalization)
    labels = config.labels

    if len(models) == 1:
        return run_model(models[0], tensor, labels, config.top_k)
    return compare(models[0], models[1], tensor, labels, config.top_k)
