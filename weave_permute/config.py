import os

import yaml

DEFAULT_CONFIG = {
    "min_size": 2,
    "max_size": 24,
    "default_size": 6,
    "catalog_path": "patterns.json",
    "yield_every": 1,
    "show_progress": False,
    "max_upload_mb": 50,
    "jpeg_quality": 90,
    "output_format": "png",
    "output_suffix": "_processed",
}


def load_config(path=None, overrides=None) -> dict:
    """
    Return DEFAULT_CONFIG updated from a YAML file and explicit overrides.

    path : str or Path, optional
        YAML mapping with a subset of DEFAULT_CONFIG keys.

    overrides : dict, optional
        Applied last; None values are ignored so argparse defaults can be
        passed straight through.

    """
    config = dict(DEFAULT_CONFIG)
    if path is not None:
        with open(os.fspath(path), "r", encoding="utf-8") as f:
            loaded = yaml.safe_load(f) or {}
        if not isinstance(loaded, dict):
            raise ValueError(f"Config file {path} must contain a mapping")
        _merge(config, loaded, source=os.fspath(path))
    if overrides:
        _merge(config, {k: v for k, v in overrides.items() if v is not None}, source="overrides")

    if config["min_size"] < 1 or config["min_size"] > config["max_size"]:
        raise ValueError(f"Invalid size bounds [{config['min_size']}, {config['max_size']}]")
    if not config["min_size"] <= config["default_size"] <= config["max_size"]:
        raise ValueError(f"default_size {config['default_size']} outside [{config['min_size']}, {config['max_size']}]")
    return config


def _merge(config: dict, updates: dict, source: str) -> None:
    unknown = sorted(set(updates) - set(DEFAULT_CONFIG))
    if unknown:
        raise ValueError(f"Unknown config keys in {source}: {', '.join(unknown)}")
    config.update(updates)


def dump_config(config: dict, path) -> None:
    with open(os.fspath(path), "w", encoding="utf-8") as f:
        yaml.dump(config, f)
