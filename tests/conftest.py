import copy

import pytest
from kubernetes.client import ApiClient, Configuration, V1EndpointSlice
from kubernetes.client.exceptions import ApiException

# Defaults the API server applies to each stored EndpointSlice port
_PORT_DEFAULTS = {"name": "", "protocol": "TCP"}


def deep_merge(base: dict, overrides: dict) -> None:
    """Apply a JSON merge patch to base in place. None values delete keys."""
    for key, val in overrides.items():
        if val is None:
            base.pop(key, None)
        elif isinstance(val, dict) and isinstance(base.get(key), dict):
            deep_merge(base[key], val)
        else:
            base[key] = val


def _store(manifest: dict) -> dict:
    """Default the object the way the API server does on write."""
    stored = copy.deepcopy(manifest)
    stored["ports"] = [{**_PORT_DEFAULTS, **p} for p in stored.get("ports") or []]
    return stored


def _as_model(stored: dict) -> V1EndpointSlice:
    """Read result as the client returns it: a model, empty lists left unset."""
    local_config = Configuration()
    local_config.client_side_validation = False
    return V1EndpointSlice(
        api_version=stored.get("apiVersion"),
        kind=stored.get("kind"),
        metadata=copy.deepcopy(stored.get("metadata")),
        address_type=stored.get("addressType"),
        ports=copy.deepcopy(stored.get("ports")) or None,
        endpoints=copy.deepcopy(stored.get("endpoints")) or None,
        local_vars_configuration=local_config,
    )


class FakeDiscoveryApi:
    """In-memory stand-in for kubernetes.client.DiscoveryV1Api."""

    def __init__(self):
        self.api_client = ApiClient()
        self.objects = {}
        self.calls = []
        self.fail_with = None

    def read_namespaced_endpoint_slice(self, name, namespace):
        self.calls.append(("read", namespace, name))
        if self.fail_with is not None:
            raise ApiException(status=self.fail_with)
        if (namespace, name) not in self.objects:
            raise ApiException(status=404, reason="Not Found")
        return _as_model(self.objects[(namespace, name)])

    def create_namespaced_endpoint_slice(self, namespace, body):
        self.calls.append(("create", namespace, body["metadata"]["name"]))
        self.objects[(namespace, body["metadata"]["name"])] = _store(body)
        return body

    def patch_namespaced_endpoint_slice(self, name, namespace, body):
        self.calls.append(("patch", namespace, name, copy.deepcopy(body)))
        current = self.objects[(namespace, name)]
        deep_merge(current, copy.deepcopy(body))
        self.objects[(namespace, name)] = _store(current)
        return self.objects[(namespace, name)]


@pytest.fixture
def fake_api():
    return FakeDiscoveryApi()


def make_endpoints(name="kubernetes", ready=(), not_ready=(), ports=None,
                   namespace="default", extra_subsets=0):
    """Build an Endpoints manifest dict."""
    subset = {
        "addresses": [{"ip": ip} for ip in ready],
        "notReadyAddresses": [{"ip": ip} for ip in not_ready],
        "ports": ports if ports is not None else [
            {"name": "https", "port": 443, "protocol": "TCP"}],
    }
    return {
        "apiVersion": "v1",
        "kind": "Endpoints",
        "metadata": {"name": name, "namespace": namespace},
        "subsets": [subset] + [copy.deepcopy(subset) for _ in range(extra_subsets)],
    }
