"""Network configuration model with YAML and dict (de)serialisation."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any

import yaml


def _str(value: Any) -> str:
    return "" if value is None else str(value)


def _int(value: Any) -> int:
    return 0 if value is None else int(value)


def _bool(value: Any) -> bool:
    return False if value is None else bool(value)


def _list(value: Any, what: str) -> list:
    if value is None:
        return []
    if not isinstance(value, list):
        raise ValueError(f"{what} must be a list")
    return value


def _mapping(value: Any, what: str) -> dict:
    if not isinstance(value, dict):
        raise ValueError(f"{what} must be a mapping")
    return value


def _compact(values: dict[str, Any]) -> dict[str, Any]:
    """Drop keys whose value is empty or zero."""
    return {key: value for key, value in values.items() if value}


@dataclass
class NetworkRoute:
    """A static route: destination and gateway."""

    to: str = ""
    via: str = ""

    @classmethod
    def _from_dict(cls, data: Any) -> NetworkRoute:
        data = _mapping(data, "route")
        return cls(to=_str(data.get("to")), via=_str(data.get("via")))

    def _to_dict(self) -> dict[str, Any]:
        return _compact({"to": self.to, "via": self.via})


def _routes(value: Any) -> list[NetworkRoute]:
    return [NetworkRoute._from_dict(item) for item in _list(value, "routes")]


def _strings(value: Any, what: str) -> list[str]:
    return [_str(item) for item in _list(value, what)]


def _ints(value: Any, what: str) -> list[int]:
    return [_int(item) for item in _list(value, what)]


@dataclass
class NetworkInterface:
    """A physical interface, bridged under its configured name."""

    name: str = ""
    hwaddr: str = ""
    mtu: int = 0
    vlan: int = 0
    vlan_tags: list[int] = field(default_factory=list)
    addresses: list[str] = field(default_factory=list)
    routes: list[NetworkRoute] = field(default_factory=list)
    lldp: bool = False
    roles: list[str] = field(default_factory=list)

    @classmethod
    def _from_dict(cls, data: Any) -> NetworkInterface:
        data = _mapping(data, "interface")
        return cls(
            name=_str(data.get("name")),
            hwaddr=_str(data.get("hwaddr")),
            mtu=_int(data.get("mtu")),
            vlan=_int(data.get("vlan")),
            vlan_tags=_ints(data.get("vlan_tags"), "vlan_tags"),
            addresses=_strings(data.get("addresses"), "addresses"),
            routes=_routes(data.get("routes")),
            lldp=_bool(data.get("lldp")),
            roles=_strings(data.get("roles"), "roles"),
        )

    def _to_dict(self) -> dict[str, Any]:
        return _compact(
            {
                "name": self.name,
                "hwaddr": self.hwaddr,
                "mtu": self.mtu,
                "vlan": self.vlan,
                "vlan_tags": list(self.vlan_tags),
                "addresses": list(self.addresses),
                "routes": [route._to_dict() for route in self.routes],
                "lldp": self.lldp,
                "roles": list(self.roles),
            }
        )


@dataclass
class NetworkBond:
    """A bond of member interfaces, bridged under its configured name."""

    name: str = ""
    mode: str = ""
    hwaddr: str = ""
    mtu: int = 0
    vlan: int = 0
    vlan_tags: list[int] = field(default_factory=list)
    addresses: list[str] = field(default_factory=list)
    routes: list[NetworkRoute] = field(default_factory=list)
    members: list[str] = field(default_factory=list)
    lldp: bool = False
    roles: list[str] = field(default_factory=list)

    @classmethod
    def _from_dict(cls, data: Any) -> NetworkBond:
        data = _mapping(data, "bond")
        return cls(
            name=_str(data.get("name")),
            mode=_str(data.get("mode")),
            hwaddr=_str(data.get("hwaddr")),
            mtu=_int(data.get("mtu")),
            vlan=_int(data.get("vlan")),
            vlan_tags=_ints(data.get("vlan_tags"), "vlan_tags"),
            addresses=_strings(data.get("addresses"), "addresses"),
            routes=_routes(data.get("routes")),
            members=_strings(data.get("members"), "members"),
            lldp=_bool(data.get("lldp")),
            roles=_strings(data.get("roles"), "roles"),
        )

    def _to_dict(self) -> dict[str, Any]:
        return _compact(
            {
                "name": self.name,
                "mode": self.mode,
                "hwaddr": self.hwaddr,
                "mtu": self.mtu,
                "vlan": self.vlan,
                "vlan_tags": list(self.vlan_tags),
                "addresses": list(self.addresses),
                "routes": [route._to_dict() for route in self.routes],
                "members": list(self.members),
                "lldp": self.lldp,
                "roles": list(self.roles),
            }
        )


@dataclass
class NetworkVLAN:
    """A VLAN carried on a parent interface or bond bridge."""

    name: str = ""
    parent: str = ""
    id: int = 0
    mtu: int = 0
    addresses: list[str] = field(default_factory=list)
    routes: list[NetworkRoute] = field(default_factory=list)
    roles: list[str] = field(default_factory=list)

    @classmethod
    def _from_dict(cls, data: Any) -> NetworkVLAN:
        data = _mapping(data, "vlan")
        return cls(
            name=_str(data.get("name")),
            parent=_str(data.get("parent")),
            id=_int(data.get("id")),
            mtu=_int(data.get("mtu")),
            addresses=_strings(data.get("addresses"), "addresses"),
            routes=_routes(data.get("routes")),
            roles=_strings(data.get("roles"), "roles"),
        )

    def _to_dict(self) -> dict[str, Any]:
        return _compact(
            {
                "name": self.name,
                "parent": self.parent,
                "id": self.id,
                "mtu": self.mtu,
                "addresses": list(self.addresses),
                "routes": [route._to_dict() for route in self.routes],
                "roles": list(self.roles),
            }
        )


@dataclass
class NetworkDNS:
    """Host naming and name resolution settings."""

    hostname: str = ""
    domain: str = ""
    search_domains: list[str] = field(default_factory=list)
    nameservers: list[str] = field(default_factory=list)

    @classmethod
    def _from_dict(cls, data: Any) -> NetworkDNS:
        data = _mapping(data, "dns")
        return cls(
            hostname=_str(data.get("hostname")),
            domain=_str(data.get("domain")),
            search_domains=_strings(data.get("search_domains"), "search_domains"),
            nameservers=_strings(data.get("nameservers"), "nameservers"),
        )

    def _to_dict(self) -> dict[str, Any]:
        return _compact(
            {
                "hostname": self.hostname,
                "domain": self.domain,
                "search_domains": list(self.search_domains),
                "nameservers": list(self.nameservers),
            }
        )


@dataclass
class NetworkNTP:
    """Time server settings."""

    timeservers: list[str] = field(default_factory=list)

    @classmethod
    def _from_dict(cls, data: Any) -> NetworkNTP:
        data = _mapping(data, "ntp")
        return cls(timeservers=_strings(data.get("timeservers"), "timeservers"))

    def _to_dict(self) -> dict[str, Any]:
        return _compact({"timeservers": list(self.timeservers)})


@dataclass
class NetworkProxy:
    """Proxy environment settings."""

    http_proxy: str = ""
    https_proxy: str = ""
    no_proxy: str = ""

    @classmethod
    def _from_dict(cls, data: Any) -> NetworkProxy:
        data = _mapping(data, "proxy")
        return cls(
            http_proxy=_str(data.get("http_proxy")),
            https_proxy=_str(data.get("https_proxy")),
            no_proxy=_str(data.get("no_proxy")),
        )

    def _to_dict(self) -> dict[str, Any]:
        return _compact(
            {
                "http_proxy": self.http_proxy,
                "https_proxy": self.https_proxy,
                "no_proxy": self.no_proxy,
            }
        )


@dataclass
class NetworkConfig:
    """The complete system network configuration."""

    dns: NetworkDNS | None = None
    ntp: NetworkNTP | None = None
    proxy: NetworkProxy | None = None
    interfaces: list[NetworkInterface] = field(default_factory=list)
    bonds: list[NetworkBond] = field(default_factory=list)
    vlans: list[NetworkVLAN] = field(default_factory=list)

    @classmethod
    def from_dict(cls, data: Any) -> NetworkConfig:
        """Build a configuration from a plain mapping; ``None`` gives an empty one."""
        if data is None:
            return cls()
        data = _mapping(data, "network configuration")

        def optional(key: str, kind: Any) -> Any:
            value = data.get(key)
            if value is None:
                return None
            return kind._from_dict(value)

        return cls(
            dns=optional("dns", NetworkDNS),
            ntp=optional("ntp", NetworkNTP),
            proxy=optional("proxy", NetworkProxy),
            interfaces=[
                NetworkInterface._from_dict(item)
                for item in _list(data.get("interfaces"), "interfaces")
            ],
            bonds=[NetworkBond._from_dict(item) for item in _list(data.get("bonds"), "bonds")],
            vlans=[NetworkVLAN._from_dict(item) for item in _list(data.get("vlans"), "vlans")],
        )

    def to_dict(self) -> dict[str, Any]:
        """Return a plain mapping, leaving out empty values."""
        result: dict[str, Any] = {}
        if self.dns is not None:
            result["dns"] = self.dns._to_dict()
        if self.ntp is not None:
            result["ntp"] = self.ntp._to_dict()
        if self.proxy is not None:
            result["proxy"] = self.proxy._to_dict()
        if self.interfaces:
            result["interfaces"] = [item._to_dict() for item in self.interfaces]
        if self.bonds:
            result["bonds"] = [item._to_dict() for item in self.bonds]
        if self.vlans:
            result["vlans"] = [item._to_dict() for item in self.vlans]
        return result

    @classmethod
    def from_yaml(cls, text: str) -> NetworkConfig:
        """Parse a configuration from YAML text."""
        return cls.from_dict(yaml.safe_load(text))

    def to_yaml(self) -> str:
        """Serialise the configuration to YAML text."""
        return yaml.safe_dump(self.to_dict(), sort_keys=False)