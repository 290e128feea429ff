"""Tests for the cifar-compare command line entry point."""

from __future__ import annotations

import json
from pathlib import Path

import numpy as np
import pytest
from PIL import Image

from cifar_compare import cli
from cifar_compare.errors import ModelLoadError
from cifar_compare.inference.base import BaseInferenceModel

CAT_LOGITS = [0.0, 0.0, 0.0, 6.0, 0.0, 2.0, 0.0, 0.0, 0.0, 0.0]


class _FakeONNXModel(BaseInferenceModel):
    def __init__(self, model_path: Path, num_threads: int | None = None) -> None:
        super().__init__(Path(model_path).stem)
        if "broken" in self.name:
            raise ModelLoadError(self.name, "invalid protobuf")
        self.num_threads = num_threads

    def invoke(self, tensor: np.ndarray) -> np.ndarray:
        return np.asarray(CAT_LOGITS, dtype=np.float32)


@pytest.fixture()
def image_path(tmp_path: Path) -> Path:
    path = tmp_path / "cat.png"
    Image.new("RGB", (48, 48), color=(120, 90, 60)).save(path)
    return path


@pytest.fixture(autouse=True)
def _fake_onnx(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setattr(cli, "ONNXModel", _FakeONNXModel)


class TestMain:
    def test_single_model(self, image_path: Path) -> None:
        assert cli.main([str(image_path), "--model", "fp32.onnx"]) == 0

    def test_comparison_writes_json(self, image_path: Path, tmp_path: Path) -> None:
        out_dir = tmp_path / "results"
        code = cli.main(
            [
                str(image_path),
                "--model", "fp32.onnx",
                "--model", "int8.onnx",
                "--top-k", "5",
                "--output-dir", str(out_dir),
            ]
        )
        assert code == 0
        data = json.loads((out_dir / "cat.json").read_text())
        assert data["filename"] == "cat.png"
        assert data["result"]["baseline"]["model_name"] == "fp32"
        assert data["result"]["candidate"]["model_name"] == "int8"
        assert len(data["result"]["baseline"]["predictions"]) == 5
        assert data["result"]["top1_agrees"] is True

    def test_load_failure_exits_nonzero(self, image_path: Path) -> None:
        code = cli.main(
            [str(image_path), "--model", "fp32.onnx", "--model", "broken.onnx"]
        )
        assert code == 1

    def test_allow_degraded_continues_single_model(
        self, image_path: Path, tmp_path: Path
    ) -> None:
        out_dir = tmp_path / "results"
        code = cli.main(
            [
                str(image_path),
                "--model", "fp32.onnx",
                "--model", "broken.onnx",
                "--allow-degraded",
                "--output-dir", str(out_dir),
            ]
        )
        assert code == 0
        data = json.loads((out_dir / "cat.json").read_text())
        assert data["result"]["model_name"] == "fp32"

    def test_too_many_models(self, image_path: Path) -> None:
        args = [str(image_path)]
        for name in ("a", "b", "c"):
            args += ["--model", f"{name}.onnx"]
        assert cli.main(args) == 1

    def test_invalid_top_k(self, image_path: Path) -> None:
        assert cli.main([str(image_path), "--model", "m.onnx", "--top-k", "0"]) == 1

    def test_missing_image(self, tmp_path: Path) -> None:
        assert cli.main([str(tmp_path / "nope.png"), "--model", "m.onnx"]) == 1

    def test_labels_mapping(self, image_path: Path, tmp_path: Path) -> None:
        mapping = tmp_path / "labels_mapping.json"
        mapping.write_text(
            json.dumps({"idx_to_class": {str(i): f"c{i}" for i in range(10)}})
        )
        out_dir = tmp_path / "results"
        code = cli.main(
            [
                str(image_path),
                "--model", "m.onnx",
                "--labels-mapping", str(mapping),
                "--output-dir", str(out_dir),
            ]
        )
        assert code == 0
        data = json.loads((out_dir / "cat.json").read_text())
        assert data["result"]["predictions"][0]["label"] == "c3"

    def test_truncated_image_exits_nonzero(self, tmp_path: Path) -> None:
        rng = np.random.default_rng(2)
        full = tmp_path / "noise.png"
        Image.fromarray(rng.integers(0, 256, (64, 64, 3), dtype=np.uint8)).save(full)
        truncated = tmp_path / "truncated.png"
        truncated.write_bytes(full.read_bytes()[: full.stat().st_size // 2])
        assert cli.main([str(truncated), "--model", "m.onnx"]) == 1

    def test_directory_as_image_exits_nonzero(self, tmp_path: Path) -> None:
        assert cli.main([str(tmp_path), "--model", "m.onnx"]) == 1

    @pytest.mark.parametrize(
        "mapping",
        [
            {"idx_to_class": ["a", "b"]},
            {"idx_to_class": {"0": "a"}, "normalization": {"mean": 0.5, "std": 1}},
        ],
    )
    def test_malformed_labels_mapping_exits_nonzero(
        self, image_path: Path, tmp_path: Path, mapping: object
    ) -> None:
        path = tmp_path / "labels_mapping.json"
        path.write_text(json.dumps(mapping))
        code = cli.main(
            [str(image_path), "--model", "m.onnx", "--labels-mapping", str(path)]
        )
        assert code == 1
