"""Output — write EndpointSlice manifests and report warnings."""

import os
import sys

import yaml

from endpoints2slice.pacts.types import EndpointSlice


def write_slices(slices: list[EndpointSlice], output_dir: str,
                 filename: str) -> str:
    """Write all slices to one multi-document YAML file; returns its path."""
    path = os.path.join(output_dir, filename)
    with open(path, "w", encoding="utf-8") as f:
        f.write("# Generated by endpoints2slice — do not edit manually\n")
        yaml.dump_all([s.to_manifest() for s in slices], f,
                      default_flow_style=False, sort_keys=False,
                      explicit_start=True)
    print(f"Wrote {path}", file=sys.stderr)
    return path


def emit_warnings(warnings: list[str]) -> None:
    """Print all warnings to stderr."""
    for w in warnings:
        print(f"⚠ {w}", file=sys.stderr)
