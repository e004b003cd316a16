#!/usr/bin/env python3
"""
Write the API contract derived from the pydantic models.

For every model in SCHEMA_MODELS a JSON Schema is written as both .json and
.yaml; the assembled OpenAPI document goes next to them as openapi.json and
openapi.yaml. Defaults to src/specs/ in the repo root.
"""
from __future__ import annotations

import argparse
import json
import sys
from pathlib import Path

import yaml

ROOT = Path(__file__).resolve().parents[1]
DEFAULT_OUT = ROOT / "src" / "specs"

sys.path.insert(0, str(ROOT))

from src.specs.models import SCHEMA_MODELS  # noqa: E402
from src.specs.openapi import build_openapi  # noqa: E402


def dump_both(document: dict, json_path: Path) -> list[Path]:
    json_path.parent.mkdir(parents=True, exist_ok=True)
    json_path.write_text(json.dumps(document, indent=2, ensure_ascii=False) + "\n", encoding="utf-8")
    yaml_path = json_path.with_suffix(".yaml")
    yaml_path.write_text(yaml.safe_dump(document, sort_keys=False, allow_unicode=True), encoding="utf-8")
    return [json_path, yaml_path]


def generate(out_dir: Path, version: str) -> list[Path]:
    written: list[Path] = []
    for filename, model in sorted(SCHEMA_MODELS.items()):
        written += dump_both(model.model_json_schema(), out_dir / "schemas" / filename)
    written += dump_both(build_openapi(version), out_dir / "openapi.json")
    return written


def main(argv: list[str] | None = None) -> int:
    parser = argparse.ArgumentParser(description=__doc__.strip().splitlines()[0])
    parser.add_argument("--out", type=Path, default=DEFAULT_OUT, help="output directory")
    parser.add_argument("--version", default="0.1.0", help="API version stamped into openapi.info")
    args = parser.parse_args(argv)

    for path in generate(args.out, args.version):
        print(f"wrote {path}")
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
