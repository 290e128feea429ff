"""ONNX Runtime model handle."""

from __future__ import annotations

from pathlib import Path

import numpy as np
import onnxruntime as ort
from loguru import logger

from cifar_compare.errors import ModelLoadError
from cifar_compare.inference.base import BaseInferenceModel
from cifar_compare.transforms.preprocess import TENSOR_SHAPE


class ONNXModel(BaseInferenceModel):
    """Load an ``.onnx`` classifier once and run it on prepared tensors.

    The session is created at construction time and reused for every
    ``invoke``.  Only the first declared output is read.

    Args:
        model_path: Path to the ``.onnx`` file.
        name: Display name.  Defaults to the file stem.
        providers: Execution providers.  Defaults to all available.
        num_threads: ``intra_op_num_threads`` for the session; ``None``
            lets ONNX Runtime decide.
        input_name: Input slot to feed.  Defaults to the first declared input.
    """

    def __init__(
        self,
        model_path: str | Path,
        name: str | None = None,
        providers: list[str] | None = None,
        num_threads: int | None = None,
        input_name: str | None = None,
    ) -> None:
        model_path = Path(model_path)
        super().__init__(name or model_path.stem)

        if not model_path.is_file():
            raise ModelLoadError(self.name, f"model file not found: {model_path}")

        options = ort.SessionOptions()
        if num_threads is not None:
            options.intra_op_num_threads = num_threads

        try:
            self.session = ort.InferenceSession(
                str(model_path),
                sess_options=options,
                providers=providers or ort.get_available_providers(),
            )
        except Exception as exc:
            raise ModelLoadError(self.name, str(exc)) from exc

        inputs = {node.name: node for node in self.session.get_inputs()}
        self.input_name = input_name or self.session.get_inputs()[0].name
        if self.input_name not in inputs:
            raise ModelLoadError(
                self.name,
                f"no input named '{self.input_name}' (inputs: {sorted(inputs)})",
            )
        self._check_input_shape(list(inputs[self.input_name].shape))
        self.output_name = self.session.get_outputs()[0].name
        logger.info(
            f"Loaded ONNX model '{self.name}' from {model_path} "
            f"(input={self.input_name}, output={self.output_name})"
        )

    def _check_input_shape(self, shape: list[int | str | None]) -> None:
        """Reject fixed input dimensions that cannot take a 1x3x32x32 tensor.

        Symbolic dimensions (strings or ``None``) are accepted as-is.
        """
        mismatch = len(shape) != len(TENSOR_SHAPE) or any(
            isinstance(dim, int) and dim != expected
            for dim, expected in zip(shape, TENSOR_SHAPE)
        )
        if mismatch:
            raise ModelLoadError(
                self.name,
                f"input shape {shape} is incompatible with {list(TENSOR_SHAPE)}",
            )

    def invoke(self, tensor: np.ndarray) -> np.ndarray:  # type: ignore[type-arg]
        outputs = self.session.run([self.output_name], {self.input_name: tensor})
        return np.asarray(outputs[0]).reshape(-1)
