"""Combine two inference results into a comparison."""

from __future__ import annotations

import math

from loguru import logger

from cifar_compare.schemas.prediction import ComparisonResult, InferenceResult


def speed_ratio(time_a: float, time_b: float) -> float | None:
    """Return ``time_a / time_b``, or ``None`` when the ratio is undefined."""
    if not (math.isfinite(time_a) and math.isfinite(time_b)) or time_b <= 0:
        logger.warning(
            f"Speed ratio undefined for times {time_a!r} ms / {time_b!r} ms"
        )
        return None
    return time_a / time_b


def report(result_a: InferenceResult, result_b: InferenceResult) -> ComparisonResult:
    """Aggregate two results; agreement compares top-1 labels only."""
    return ComparisonResult(
        baseline=result_a,
        candidate=result_b,
        speed_ratio=speed_ratio(result_a.elapsed_ms, result_b.elapsed_ms),
        top1_agrees=result_a.top1.label == result_b.top1.label,
    )
