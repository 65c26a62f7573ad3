"""Config file (endpoints2slice.yaml) loading and saving."""

import os

import yaml

from endpoints2slice.core.constants import DEFAULT_NAMESPACE, DEFAULT_OUTPUT_FILE


def load_config(path: str) -> dict:
    """Load endpoints2slice.yaml or return empty config."""
    if os.path.exists(path):
        with open(path, encoding="utf-8") as f:
            cfg = yaml.safe_load(f) or {}
    else:
        cfg = {}
    cfg.setdefault("endpoints2sliceVersion", "v1")
    cfg.setdefault("namespace", DEFAULT_NAMESPACE)
    cfg.setdefault("exclude", [])
    cfg.setdefault("output_file", DEFAULT_OUTPUT_FILE)
    return cfg


def save_config(path: str, config: dict) -> None:
    """Write endpoints2slice.yaml."""
    header = "# Configuration for endpoints2slice\n\n"
    # Ensure version key comes first
    ordered = {"endpoints2sliceVersion": config.get("endpoints2sliceVersion", "v1")}
    for k, v in config.items():
        if k != "endpoints2sliceVersion":
            ordered[k] = v
    with open(path, "w", encoding="utf-8") as f:
        f.write(header)
        yaml.dump(ordered, f, default_flow_style=False, sort_keys=False)
