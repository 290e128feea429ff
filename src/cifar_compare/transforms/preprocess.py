"""Convert RGBA pixel buffers into normalized CHW float32 tensors."""

from __future__ import annotations

from pathlib import Path
from typing import Any

import numpy as np
from PIL import Image

from cifar_compare.config import IMAGE_SIZE, NUM_CHANNELS, NormalizationConfig
from cifar_compare.errors import PreconditionError

# Interleaved samples per pixel in the buffer (RGB + ignored alpha).
SAMPLES_PER_PIXEL = 4
PIXEL_BUFFER_SIZE = IMAGE_SIZE * IMAGE_SIZE * SAMPLES_PER_PIXEL
TENSOR_SHAPE = (1, NUM_CHANNELS, IMAGE_SIZE, IMAGE_SIZE)


ACCEPTED_SHAPES = (
    (PIXEL_BUFFER_SIZE,),
    (IMAGE_SIZE * IMAGE_SIZE, SAMPLES_PER_PIXEL),
    (IMAGE_SIZE, IMAGE_SIZE, SAMPLES_PER_PIXEL),
)


def _as_samples(pixels: Any) -> np.ndarray:  # type: ignore[type-arg]
    """Validate a pixel buffer and view it as ``(1024, 4)`` samples."""
    if isinstance(pixels, (bytes, bytearray, memoryview)):
        samples = np.frombuffer(pixels, dtype=np.uint8)
    else:
        samples = np.asarray(pixels)

    if samples.shape not in ACCEPTED_SHAPES:
        raise PreconditionError(
            f"Pixel buffer must be {IMAGE_SIZE}x{IMAGE_SIZE} with "
            f"{SAMPLES_PER_PIXEL} samples per pixel, got shape {samples.shape}"
        )
    if samples.dtype == np.bool_ or not np.issubdtype(samples.dtype, np.integer):
        raise PreconditionError(
            f"Pixel samples must be integers in 0..255, got dtype {samples.dtype}"
        )
    if samples.min() < 0 or samples.max() > 255:
        raise PreconditionError(
            f"Pixel samples must be in 0..255, got range "
            f"{samples.min()}..{samples.max()}"
        )
    return samples.reshape(IMAGE_SIZE * IMAGE_SIZE, SAMPLES_PER_PIXEL)


def preprocess(
    pixels: Any,
    config: NormalizationConfig | None = None,
) -> np.ndarray:  # type: ignore[type-arg]
    """Build the ``(1, 3, 32, 32)`` float32 model input from an RGBA buffer.

    Each retained channel is scaled from ``[0, 255]`` to ``[0, 1]`` and
    standardized with ``(x - mean[c]) / std[c]``.  Channel planes are laid
    out one after another (CHW), each in row-major pixel order.  The fourth
    sample of every pixel is dropped without alpha blending.

    Args:
        pixels: 4096 interleaved RGBA samples as bytes, a flat sequence, or
            an integer array of shape ``(1024, 4)`` or ``(32, 32, 4)``.
        config: Normalization constants.  Defaults to CIFAR-10 statistics.

    Raises:
        PreconditionError: If the buffer is not 32x32 with 4 samples per
            pixel, or holds non-integer or out-of-range samples.
    """
    config = config or NormalizationConfig()
    samples = _as_samples(pixels)

    mean = np.asarray(config.mean, dtype=np.float64)[:, np.newaxis]
    std = np.asarray(config.std, dtype=np.float64)[:, np.newaxis]

    # (pixels, channels) -> (channels, pixels) gives the planar layout
    planes = samples[:, :NUM_CHANNELS].T.astype(np.float64) / 255.0
    standardized = (planes - mean) / std
    return np.ascontiguousarray(standardized.astype(np.float32).reshape(TENSOR_SHAPE))


def load_pixels(path: str | Path, size: int = IMAGE_SIZE) -> np.ndarray:  # type: ignore[type-arg]
    """Decode an image file and resize it to a ``(size, size, 4)`` RGBA array."""
    path = Path(path)
    try:
        with Image.open(path) as img:
            rgba = img.convert("RGBA").resize(
                (size, size), Image.Resampling.BILINEAR
            )
    except OSError as exc:
        raise PreconditionError(f"Cannot read image {path}: {exc}") from exc
    return np.asarray(rgba, dtype=np.uint8)
