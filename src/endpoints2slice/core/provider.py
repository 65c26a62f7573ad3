"""Persist converted EndpointSlices through the Kubernetes API (create-or-patch)."""

import copy
import sys

from kubernetes.client.exceptions import ApiException

from endpoints2slice.pacts.helpers import merge_diff
from endpoints2slice.pacts.types import EndpointSlice, EndpointsResource
from endpoints2slice.core.constants import (
    DEFAULT_NAMESPACE, DEFAULT_SERVICE_NAME,
    ENDPOINTSLICE_API_VERSION, ENDPOINTSLICE_KIND,
)
from endpoints2slice.core.convert import convert

# Port fields the API server fills in when a slice is stored without them
_SERVER_PORT_DEFAULTS = {"name": "", "protocol": "TCP"}


def _as_dict(api, obj) -> dict:
    """Serialize a read result to a plain manifest dict.

    API model objects go through the client's serializer (which drops unset
    fields); plain dicts, as returned by dict-based clients, are copied.
    """
    if isinstance(obj, dict):
        return copy.deepcopy(obj)
    return api.api_client.sanitize_for_serialization(obj)


def _normalized(obj: dict) -> dict:
    """Server-side view of *obj*, used only to decide whether a write is needed.

    Missing labels/ports/endpoints equal empty ones, and ports get the
    name/protocol defaults the API server applies on storage.
    """
    out = copy.deepcopy(obj)
    meta = out.setdefault("metadata", {})
    if meta.get("labels") is None:
        meta["labels"] = {}
    for key in ("ports", "endpoints"):
        if out.get(key) is None:
            out[key] = []
    out["ports"] = [{**_SERVER_PORT_DEFAULTS, **p} for p in out["ports"]]
    return out


def _overwrite_fields(obj: dict, endpoint_slice: EndpointSlice) -> None:
    """Replace labels, addressType, ports and endpoints; touch nothing else."""
    derived = endpoint_slice.to_manifest()
    obj.setdefault("metadata", {})["labels"] = derived["metadata"]["labels"]
    obj["addressType"] = derived["addressType"]
    obj["ports"] = derived["ports"]
    obj["endpoints"] = derived["endpoints"]


def create_or_patch(api, namespace: str, name: str, mutate) -> str:
    """Fetch-or-initialize the EndpointSlice *namespace/name*, mutate, persist.

    *api* is a ``kubernetes.client.DiscoveryV1Api`` (or anything with the same
    read/create/patch methods). *mutate* receives the manifest dict and
    overwrites fields in place. Returns "created", "patched" or "unchanged".
    API errors other than 404 on read (conflicts included) propagate.
    """
    try:
        current = api.read_namespaced_endpoint_slice(name, namespace)
    except ApiException as exc:
        if exc.status != 404:
            raise
        current = None

    if current is None:
        body = EndpointSliceProvider.new_object(namespace, name)
        mutate(body)
        api.create_namespaced_endpoint_slice(namespace, body)
        print(f"Created {ENDPOINTSLICE_KIND} {namespace}/{name}", file=sys.stderr)
        return "created"

    before = _as_dict(api, current)
    after = copy.deepcopy(before)
    mutate(after)
    if _normalized(after) == _normalized(before):
        return "unchanged"
    patch = merge_diff(before, after)
    api.patch_namespaced_endpoint_slice(name, namespace, patch)
    print(f"Patched {ENDPOINTSLICE_KIND} {namespace}/{name}", file=sys.stderr)
    return "patched"


class EndpointSliceProvider:
    """discovery.k8s.io/v1 provider: builds and persists EndpointSlices."""
    api_version: str = ENDPOINTSLICE_API_VERSION

    @classmethod
    def new_object(cls, namespace: str, name: str) -> dict:
        """Empty EndpointSlice manifest carrying only its identity."""
        return {
            "apiVersion": cls.api_version,
            "kind": ENDPOINTSLICE_KIND,
            "metadata": {"namespace": namespace, "name": name},
        }

    def endpoint_slice_from_endpoints(self, endpoints: EndpointsResource) -> EndpointSlice:
        return convert(endpoints)

    def create_or_patch(self, api, endpoints: EndpointsResource,
                        namespace: str = DEFAULT_NAMESPACE,
                        name: str = DEFAULT_SERVICE_NAME) -> str:
        """Mirror *endpoints* into the EndpointSlice *namespace/name*.

        Only metadata.labels, addressType, ports and endpoints are written;
        every other field of an existing object is left as it is.
        """
        def mutate(obj: dict) -> None:
            _overwrite_fields(obj, self.endpoint_slice_from_endpoints(endpoints))

        return create_or_patch(api, namespace, name, mutate)


def apply_slices(api, slices: list[EndpointSlice], namespace: str) -> dict[str, str]:
    """Create-or-patch every slice under its own name; returns {"ns/name": outcome}."""
    outcomes: dict[str, str] = {}
    for endpoint_slice in slices:
        ns = endpoint_slice.namespace or namespace
        outcomes[f"{ns}/{endpoint_slice.name}"] = create_or_patch(
            api, ns, endpoint_slice.name,
            lambda obj, s=endpoint_slice: _overwrite_fields(obj, s))
    return outcomes
