"""CIFAR-10 single-image classification and FP32/INT8 model comparison."""

__version__ = "0.0.1"
