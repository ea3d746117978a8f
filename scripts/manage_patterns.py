#!/usr/bin/env python3
import argparse
import sys
from pathlib import Path

ROOT = Path(__file__).resolve().parents[1]
sys.path.insert(0, str(ROOT))

from weave_permute.catalog import JsonFileCatalog
from weave_permute.config import load_config
from weave_permute.errors import PatternValidationError
from weave_permute.patterns import get_pattern, list_patterns
from weave_permute.validation import parse_pattern_text


def _format_record(record) -> str:
    pattern = ",".join(str(v) for v in record.pattern)
    return f"{record.id}  {record.name:<24} size={record.size:<3} pattern={pattern}  created={record.created_at}"


def run(args) -> int:
    config = load_config(args.config)
    catalog = JsonFileCatalog(
        args.catalog or config["catalog_path"],
        min_size=config["min_size"],
        max_size=config["max_size"],
    )

    try:
        if args.command == "list":
            records = catalog.list()
            if not records:
                print("No saved patterns yet")
            for record in records:
                print(_format_record(record))
        elif args.command == "presets":
            size = args.size if args.size is not None else config["default_size"]
            for name in list_patterns():
                print(f"{name:<12} {','.join(str(v) for v in get_pattern(size, name).pattern)}")
        elif args.command == "create":
            values = parse_pattern_text(args.pattern)
            size = args.size if args.size is not None else len(values)
            record = catalog.create(args.name, size, values)
            print(f"Created {_format_record(record)}")
        elif args.command == "update":
            pattern = parse_pattern_text(args.pattern) if args.pattern else None
            record = catalog.update(args.id, name=args.name, pattern=pattern)
            print(f"Updated {_format_record(record)}")
        elif args.command == "delete":
            if not catalog.delete(args.id):
                print(f"No pattern with id {args.id}", file=sys.stderr)
                return 1
            print(f"Deleted {args.id}")
    except PatternValidationError as exc:
        print(f"Invalid pattern: {exc}", file=sys.stderr)
        return 1
    except KeyError as exc:
        print(f"No pattern with id {exc.args[0]}", file=sys.stderr)
        return 1
    except ValueError as exc:
        print(str(exc), file=sys.stderr)
        return 1
    return 0


if __name__ == "__main__":
    parser = argparse.ArgumentParser(description="Manage saved pixel reordering patterns.")
    parser.add_argument("--catalog", type=str, default=None, help="Pattern catalog JSON file")
    parser.add_argument("--config", type=str, default=None, help="YAML config file")
    sub = parser.add_subparsers(dest="command", required=True)

    sub.add_parser("list")

    presets = sub.add_parser("presets")
    presets.add_argument("--size", type=int, default=None)

    create = sub.add_parser("create")
    create.add_argument("--name", type=str, required=True)
    create.add_argument("--pattern", type=str, required=True)
    create.add_argument("--size", type=int, default=None)

    update = sub.add_parser("update")
    update.add_argument("id", type=str)
    update.add_argument("--name", type=str, default=None)
    update.add_argument("--pattern", type=str, default=None)

    delete = sub.add_parser("delete")
    delete.add_argument("id", type=str)

    sys.exit(run(parser.parse_args()))
