"""CLI entry point — convert Endpoints manifests to EndpointSlices, optionally apply them."""

import argparse
import os
import sys

from kubernetes import client, config as kube_config
from kubernetes.client.exceptions import ApiException

from endpoints2slice.core.constants import CONFIG_FILENAME
from endpoints2slice.core.convert import convert_manifests
from endpoints2slice.core.provider import apply_slices
from endpoints2slice.io.config import load_config, save_config
from endpoints2slice.io.output import emit_warnings, write_slices
from endpoints2slice.io.parsing import parse_manifests


def _build_api(kubeconfig: str | None = None, context: str | None = None):
    """Load kubeconfig and return a DiscoveryV1Api client."""
    kube_config.load_kube_config(config_file=kubeconfig, context=context)
    return client.DiscoveryV1Api()


def main(argv: list[str] | None = None):
    """CLI entry point."""
    parser = argparse.ArgumentParser(
        description="Convert Endpoints manifests to discovery.k8s.io/v1 EndpointSlices"
    )
    parser.add_argument(
        "--from", dest="source", required=True,
        help="YAML file or directory containing Endpoints manifests",
    )
    parser.add_argument(
        "--output-dir", default=".",
        help="Where to write the slices and endpoints2slice.yaml (default: .)",
    )
    parser.add_argument(
        "--output-file",
        help="Name of the generated YAML file (default: from config, endpointslices.yaml)",
    )
    parser.add_argument(
        "--namespace",
        help="Namespace for slices whose Endpoints carry none (default: from config)",
    )
    parser.add_argument(
        "--apply", action="store_true",
        help="Create or patch the slices in the cluster as well",
    )
    parser.add_argument("--kubeconfig", help="Path to kubeconfig (with --apply)")
    parser.add_argument("--context", help="Kubeconfig context (with --apply)")
    args = parser.parse_args(argv)

    if not os.path.exists(args.source):
        print(f"Input not found: {args.source}", file=sys.stderr)
        sys.exit(1)
    os.makedirs(args.output_dir, exist_ok=True)

    # Step 1: parse
    manifests = parse_manifests(args.source)
    kinds = {k: len(v) for k, v in manifests.items()}
    print(f"Parsed manifests: {kinds}", file=sys.stderr)

    # Step 2: load config
    config_path = os.path.join(args.output_dir, CONFIG_FILENAME)
    first_run = not os.path.exists(config_path)
    cfg = load_config(config_path)
    # One-off override, never persisted to the config file
    namespace = args.namespace or cfg["namespace"]

    # Step 3: convert
    slices, warnings = convert_manifests(manifests, cfg)
    emit_warnings(warnings)
    if not slices:
        print("No Endpoints converted — nothing to write.", file=sys.stderr)
        sys.exit(1)

    # Step 4: write outputs
    write_slices(slices, args.output_dir, args.output_file or cfg["output_file"])
    save_config(config_path, cfg)
    print(f"Wrote {config_path}", file=sys.stderr)

    # Step 5: apply
    if args.apply:
        try:
            api = _build_api(args.kubeconfig, args.context)
        except kube_config.ConfigException as exc:
            print(f"Error: cannot load kubeconfig ({exc})", file=sys.stderr)
            sys.exit(1)
        try:
            outcomes = apply_slices(api, slices, namespace)
        except ApiException as exc:
            print(f"Error: apply failed ({exc.status} {exc.reason})", file=sys.stderr)
            sys.exit(1)
        unchanged = sorted(k for k, v in outcomes.items() if v == "unchanged")
        if unchanged:
            print(f"Unchanged: {', '.join(unchanged)}", file=sys.stderr)

    if first_run:
        print(
            f"\n⚠ First run — {CONFIG_FILENAME} was created.\n"
            "  Review the exclude list and namespace, then re-run.",
            file=sys.stderr,
        )


if __name__ == "__main__":
    main()
