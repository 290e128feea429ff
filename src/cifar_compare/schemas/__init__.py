"""Classification result schemas."""

from cifar_compare.schemas.prediction import (
    ClassPrediction,
    ComparisonResult,
    InferenceResult,
)
from cifar_compare.schemas.record import ClassificationRecord

__all__ = [
    "ClassPrediction",
    "ClassificationRecord",
    "ComparisonResult",
    "InferenceResult",
]
