"""Public data types — Endpoints on the way in, EndpointSlice on the way out."""

import copy
from dataclasses import dataclass, field

from endpoints2slice.core.constants import (
    ENDPOINTSLICE_API_VERSION, ENDPOINTSLICE_KIND,
)


@dataclass
class Address:
    """One entry of a subset's ``addresses`` or ``notReadyAddresses``."""
    ip: str
    target_ref: dict | None = None
    node_name: str | None = None

    @classmethod
    def from_manifest(cls, raw: dict) -> "Address":
        return cls(
            ip=raw.get("ip", ""),
            target_ref=copy.deepcopy(raw.get("targetRef")),
            node_name=raw.get("nodeName"),
        )


@dataclass
class EndpointPort:
    """A (port, name, protocol) triple; missing members stay None."""
    port: int | None = None
    name: str | None = None
    protocol: str | None = None

    @classmethod
    def from_manifest(cls, raw: dict) -> "EndpointPort":
        return cls(port=raw.get("port"), name=raw.get("name"),
                   protocol=raw.get("protocol"))

    def to_manifest(self) -> dict:
        out = {}
        if self.name is not None:
            out["name"] = self.name
        if self.port is not None:
            out["port"] = self.port
        if self.protocol is not None:
            out["protocol"] = self.protocol
        return out


@dataclass
class Subset:
    """A group of ports plus ready and not-ready addresses."""
    ports: list[EndpointPort] = field(default_factory=list)
    ready_addresses: list[Address] = field(default_factory=list)
    not_ready_addresses: list[Address] = field(default_factory=list)

    @classmethod
    def from_manifest(cls, raw: dict) -> "Subset":
        return cls(
            ports=[EndpointPort.from_manifest(p) for p in raw.get("ports") or []],
            ready_addresses=[Address.from_manifest(a)
                             for a in raw.get("addresses") or []],
            not_ready_addresses=[Address.from_manifest(a)
                                 for a in raw.get("notReadyAddresses") or []],
        )


@dataclass
class EndpointsResource:
    """Legacy core/v1 Endpoints resource."""
    name: str
    namespace: str = ""
    subsets: list[Subset] = field(default_factory=list)

    @classmethod
    def from_manifest(cls, manifest: dict) -> "EndpointsResource":
        """Build from a parsed Endpoints manifest (tolerates null sections)."""
        meta = manifest.get("metadata") or {}
        return cls(
            name=meta.get("name", ""),
            namespace=meta.get("namespace", ""),
            subsets=[Subset.from_manifest(s) for s in manifest.get("subsets") or []],
        )


@dataclass
class Endpoint:
    """A single EndpointSlice endpoint; always holds exactly one address."""
    addresses: list[str]
    ready: bool
    target_ref: dict | None = None
    node_name: str | None = None

    def to_manifest(self) -> dict:
        out = {
            "addresses": list(self.addresses),
            "conditions": {"ready": self.ready},
        }
        if self.target_ref is not None:
            out["targetRef"] = copy.deepcopy(self.target_ref)
        if self.node_name is not None:
            out["nodeName"] = self.node_name
        return out


@dataclass
class EndpointSlice:
    """discovery.k8s.io/v1 EndpointSlice derived from an Endpoints resource."""
    name: str
    labels: dict[str, str]
    address_type: str
    ports: list[EndpointPort] = field(default_factory=list)
    endpoints: list[Endpoint] = field(default_factory=list)
    namespace: str = ""

    def to_manifest(self) -> dict:
        """Render as a manifest dict, ready for yaml.dump or the API client."""
        metadata = {"name": self.name}
        if self.namespace:
            metadata["namespace"] = self.namespace
        metadata["labels"] = dict(self.labels)
        return {
            "apiVersion": ENDPOINTSLICE_API_VERSION,
            "kind": ENDPOINTSLICE_KIND,
            "metadata": metadata,
            "addressType": self.address_type,
            "ports": [p.to_manifest() for p in self.ports],
            "endpoints": [e.to_manifest() for e in self.endpoints],
        }
