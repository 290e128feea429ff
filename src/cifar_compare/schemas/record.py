"""Persisted classification record."""

from __future__ import annotations

from datetime import UTC, datetime

from pydantic import BaseModel, Field

from cifar_compare.schemas.prediction import ComparisonResult, InferenceResult


class ClassificationRecord(BaseModel):
    """Result for one image, with the source filename and creation time."""

    filename: str
    result: ComparisonResult | InferenceResult
    created_at: str = Field(default_factory=lambda: datetime.now(tz=UTC).isoformat())
