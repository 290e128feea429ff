"""Persist classification records as pretty-printed JSON."""

from __future__ import annotations

from pathlib import Path

import orjson

from cifar_compare.schemas.record import ClassificationRecord


class ResultWriter:
    """Store each record as ``<output_dir>/<image stem>.json``.

    A record for ``cat.png`` overwrites any earlier ``cat.json``.
    """

    def __init__(self, output_dir: Path) -> None:
        self.output_dir = output_dir
        self.output_dir.mkdir(parents=True, exist_ok=True)

    def path_for(self, record: ClassificationRecord) -> Path:
        return self.output_dir / f"{Path(record.filename).stem}.json"

    def write(self, record: ClassificationRecord) -> Path:
        out_path = self.path_for(record)
        payload = record.model_dump(mode="json")
        out_path.write_bytes(orjson.dumps(payload, option=orjson.OPT_INDENT_2))
        return out_path
