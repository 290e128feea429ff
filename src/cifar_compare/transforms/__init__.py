"""Pixel-to-tensor transforms for 32x32 CIFAR-10 model input."""

from cifar_compare.transforms.preprocess import load_pixels, preprocess

__all__ = [
    "load_pixels",
    "preprocess",
]
