"""Command line entry point: classify one image with one or two ONNX models.

Usage::

    # Compare a full-precision model against its INT8 quantization
    cifar-compare cat.png \\
        --model resnet_exported.onnx \\
        --model image_classifier_model_int8.onnx

    # Single model, custom labels, save JSON
    cifar-compare cat.png --model model.onnx \\
        --labels-mapping labels_mapping.json --output-dir results
"""

from __future__ import annotations

import argparse
import sys
from pathlib import Path

from loguru import logger

from cifar_compare.config import ClassifierConfig
from cifar_compare.errors import ClassificationError, ModelLoadError
from cifar_compare.inference.base import BaseInferenceModel
from cifar_compare.inference.onnx_model import ONNXModel
from cifar_compare.inference.orchestrator import classify
from cifar_compare.io.writer import ResultWriter
from cifar_compare.render import render_result
from cifar_compare.schemas.record import ClassificationRecord
from cifar_compare.transforms.preprocess import load_pixels


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        description="Classify a CIFAR-10 image with one or two ONNX models"
    )
    parser.add_argument("image", type=Path, help="Image file to classify")
    parser.add_argument(
        "--model",
        type=Path,
        action="append",
        required=True,
        dest="models",
        help="ONNX model path; pass twice to compare (first is the baseline)",
    )
    parser.add_argument(
        "--labels-mapping",
        type=Path,
        default=None,
        help="labels_mapping.json with idx_to_class and normalization",
    )
    parser.add_argument(
        "--top-k", type=int, default=3, help="Predictions per model (default: 3)"
    )
    parser.add_argument(
        "--num-threads",
        type=int,
        default=1,
        help="ONNX Runtime intra-op threads per model (default: 1)",
    )
    parser.add_argument(
        "--output-dir",
        type=Path,
        default=None,
        help="Write the result as JSON into this directory",
    )
    parser.add_argument(
        "--allow-degraded",
        action="store_true",
        help="Continue with one model if the other fails to load",
    )
    parser.add_argument("--log-level", default="INFO", help="Loguru log level")
    return parser


def load_models(
    paths: list[Path], num_threads: int, allow_degraded: bool
) -> list[BaseInferenceModel]:
    """Load every model; optionally drop one that fails when comparing two."""
    models: list[BaseInferenceModel] = []
    for path in paths:
        try:
            models.append(ONNXModel(path, num_threads=num_threads))
        except ModelLoadError as exc:
            if not (allow_degraded and len(paths) == 2):
                raise
            logger.warning(f"{exc}; continuing in single-model mode")
    if not models:
        raise ModelLoadError(str(paths[-1]), "no model could be loaded")
    return models


def main(argv: list[str] | None = None) -> int:
    args = build_parser().parse_args(argv)

    logger.remove()
    logger.add(sys.stderr, level=args.log_level)

    if len(args.models) > 2:
        logger.error("At most two --model arguments are supported")
        return 1

    try:
        if args.labels_mapping is not None:
            config = ClassifierConfig.from_labels_mapping(
                args.labels_mapping, top_k=args.top_k
            )
        else:
            config = ClassifierConfig(top_k=args.top_k)
    except (OSError, KeyError, ValueError) as exc:
        logger.error(f"Invalid configuration: {exc}")
        return 1

    try:
        models = load_models(args.models, args.num_threads, args.allow_degraded)
        pixels = load_pixels(args.image)
        result = classify(pixels, models, config)
    except ClassificationError as exc:
        logger.error(str(exc))
        return 1

    render_result(result)

    if args.output_dir is not None:
        writer = ResultWriter(args.output_dir)
        out_path = writer.write(
            ClassificationRecord(filename=args.image.name, result=result)
        )
        logger.info(f"Result saved to {out_path}")
    return 0


if __name__ == "__main__":
    sys.exit(main())
