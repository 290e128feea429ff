"""Prediction value objects.

One ``InferenceResult`` per model run; a ``ComparisonResult`` pairs two of
them when a full-precision model is compared against a quantized one.
"""

from __future__ import annotations

from pydantic import BaseModel, Field


class ClassPrediction(BaseModel, frozen=True):
    """A single classification prediction."""

    class_id: int
    label: str
    confidence: float = Field(ge=0.0, le=1.0)


class InferenceResult(BaseModel, frozen=True):
    """Ranked top-K predictions of one model plus its invocation latency."""

    model_name: str
    predictions: list[ClassPrediction]
    elapsed_ms: float = Field(ge=0.0)

    @property
    def top1(self) -> ClassPrediction:
        return self.predictions[0]


class ComparisonResult(BaseModel, frozen=True):
    """Side-by-side result of two models run on the same input tensor.

    ``speed_ratio`` is ``baseline.elapsed_ms / candidate.elapsed_ms`` and is
    ``None`` when the candidate time is zero or unmeasurable.
    """

    baseline: InferenceResult
    candidate: InferenceResult
    speed_ratio: float | None
    top1_agrees: bool
