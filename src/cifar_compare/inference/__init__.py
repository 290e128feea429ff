"""Model invocation and request orchestration."""

from cifar_compare.inference.base import BaseInferenceModel
from cifar_compare.inference.onnx_model import ONNXModel
from cifar_compare.inference.orchestrator import classify, compare, run_model

__all__ = [
    "BaseInferenceModel",
    "ONNXModel",
    "classify",
    "compare",
    "run_model",
]
