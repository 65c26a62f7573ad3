"""Public helper functions for working with manifest dicts."""


def full_name(manifest: dict) -> str:
    """Return 'Kind/namespace/name' (or 'Kind/name') for use in messages."""
    meta = manifest.get("metadata") or {}
    ns = meta.get("namespace", "")
    name = meta.get("name", "?")
    kind = manifest.get("kind", "?")
    return f"{kind}/{ns}/{name}" if ns else f"{kind}/{name}"


def merge_diff(before: dict, after: dict) -> dict:
    """Return the JSON merge patch turning *before* into *after*.

    Keys missing from *after* map to None, nested dicts are diffed
    recursively, anything else (lists included) is replaced whole. An empty result means nothing changed.
    """
    patch = {}
    for key in before:
        if key not in after:
            patch[key] = None
    for key, val in after.items():
        old = before.get(key)
        if isinstance(val, dict) and isinstance(old, dict):
            sub = merge_diff(old, val)
            if sub:
                patch[key] = sub
        elif key not in before or old != val:
            patch[key] = val
    return patch
