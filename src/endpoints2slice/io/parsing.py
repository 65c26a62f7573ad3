"""Manifest loading — read YAML files and classify documents by kind."""

import sys
from pathlib import Path

import yaml

_YAML_SUFFIXES = (".yaml", ".yml")


def _yaml_files(source: str) -> list[Path]:
    """Return *source* itself if it is a file, else every YAML file below it."""
    path = Path(source)
    if path.is_file():
        return [path]
    return sorted(p for p in path.rglob("*") if p.suffix in _YAML_SUFFIXES and p.is_file())


def parse_manifests(source: str) -> dict[str, list[dict]]:
    """Load all YAML documents from a file or directory, classify by kind.

    ``List`` documents (as printed by ``kubectl get -o yaml``) are unpacked
    into their items. Files that fail to parse are skipped with a note.
    """
    manifests: dict[str, list[dict]] = {}
    for yaml_file in _yaml_files(source):
        try:
            with open(yaml_file, encoding="utf-8") as f:
                for doc in yaml.safe_load_all(f):
                    if not doc or not isinstance(doc, dict):
                        continue
                    docs, item_kind = [doc], "Unknown"
                    doc_kind = str(doc.get("kind", ""))
                    if doc_kind.endswith("List"):
                        # Typed lists (EndpointsList) omit kind on their items
                        docs, item_kind = doc.get("items") or [], doc_kind[:-4] or "Unknown"
                    for item in docs:
                        if isinstance(item, dict):
                            kind = item.get("kind", item_kind)
                            manifests.setdefault(kind, []).append(item)
        except yaml.YAMLError as exc:
            print(f"⚠ Skipping {yaml_file.name}: {exc.__class__.__name__}",
                  file=sys.stderr)
    return manifests
