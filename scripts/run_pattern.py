#!/usr/bin/env python3
import argparse
import json
import sys
import time
import traceback
from pathlib import Path

ROOT = Path(__file__).resolve().parents[1]
sys.path.insert(0, str(ROOT))

from weave_permute.catalog import JsonFileCatalog
from weave_permute.config import dump_config, load_config
from weave_permute.engine import PermutationEngine
from weave_permute.patterns import get_pattern
from weave_permute.utils.image_io import load_image, output_path_for, save_image
from weave_permute.validation import parse_pattern_text, validate_pattern


def _write_json(path: Path, payload: dict) -> None:
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(json.dumps(payload, indent=2))


def _resolve_pattern(args, config):
    """Return (validated pattern, label) from --preset, --pattern or --pattern_id."""
    if args.pattern_id:
        catalog = JsonFileCatalog(
            args.catalog or config["catalog_path"],
            min_size=config["min_size"],
            max_size=config["max_size"],
        )
        record = catalog.get(args.pattern_id)
        return record.validated(), record.name
    if args.pattern:
        values = parse_pattern_text(args.pattern)
        size = args.size if args.size is not None else len(values)
        return validate_pattern(size, values), "custom"
    size = args.size if args.size is not None else config["default_size"]
    return get_pattern(size, args.preset), args.preset


def _base_metrics(args) -> dict:
    return {
        "status": None,
        "image": args.image,
        "output": None,
        "pattern_name": None,
        "size": None,
        "pattern": None,
        "width": None,
        "height": None,
        "slices": None,
        "runtime_seconds": None,
        "error": None,
    }


def run(args) -> int:
    start = time.time()
    metrics = _base_metrics(args)
    try:
        config = load_config(
            args.config,
            overrides={
                "output_format": args.format,
                "show_progress": True if args.progress else None,
            },
        )
        pattern, label = _resolve_pattern(args, config)
        metrics.update({"pattern_name": label, "size": pattern.size, "pattern": pattern.as_list()})

        buffer = load_image(args.image, max_bytes=int(config["max_upload_mb"] * 1024 * 1024))
        metrics.update({"width": buffer.width, "height": buffer.height, "slices": buffer.width // pattern.size})
        print(f"Image loaded: {buffer.width}x{buffer.height} pixels")

        engine = PermutationEngine(yield_every=config["yield_every"], show_progress=config["show_progress"])
        result = engine.apply(buffer, pattern)

        if args.output:
            output = Path(args.output)
        else:
            output = output_path_for(args.image, config["output_format"], config["output_suffix"])
        save_image(result, output, fmt=config["output_format"], jpeg_quality=config["jpeg_quality"])
        dump_config(config, output.parent / f"{output.stem}_config.yaml")
        metrics["output"] = str(output)
        metrics["status"] = "SUCCESS"
        print(f"Saved processed image to {output}")
    except Exception as exc:
        metrics["status"] = "FAILED"
        metrics["error"] = str(exc)
        metrics["traceback"] = traceback.format_exc()
        print(f"Processing failed: {exc}", file=sys.stderr)
    metrics["runtime_seconds"] = time.time() - start

    run_json = Path(args.run_json) if args.run_json else Path(metrics["output"] or args.image).parent / "run.json"
    _write_json(run_json, metrics)
    return 0 if metrics["status"] == "SUCCESS" else 1


if __name__ == "__main__":
    parser = argparse.ArgumentParser(description="Apply a column reordering pattern to an image.")
    parser.add_argument("--image", type=str, required=True, help="BMP, JPEG or PNG input")
    group = parser.add_mutually_exclusive_group()
    group.add_argument("--preset", type=str, default="identity", help="Preset pattern name")
    group.add_argument("--pattern", type=str, default=None, help="Comma separated 1-based pattern, e.g. 3,1,2")
    group.add_argument("--pattern_id", type=str, default=None, help="Pattern id from the catalog")
    parser.add_argument("--size", type=int, default=None, help="Slice width for presets")
    parser.add_argument("--catalog", type=str, default=None, help="Pattern catalog JSON file")
    parser.add_argument("--config", type=str, default=None, help="YAML config file")
    parser.add_argument("--format", type=str, default=None, choices=["png", "jpg", "bmp"])
    parser.add_argument("--output", type=str, default=None)
    parser.add_argument("--run_json", type=str, default=None)
    parser.add_argument("--progress", action="store_true")

    sys.exit(run(parser.parse_args()))
