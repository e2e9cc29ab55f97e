"""Generation of systemd-networkd and timesyncd configuration files."""

from __future__ import annotations

import os
import re
import shutil
from dataclasses import dataclass
from pathlib import Path

from osdconfig.config import (
    NetworkBond,
    NetworkConfig,
    NetworkDNS,
    NetworkNTP,
    NetworkRoute,
    NetworkVLAN,
)

SYSTEM_EXTENSIONS_PATH = "/var/lib/extensions"
SYSTEM_UPDATES_PATH = "/var/lib/updates"
SYSTEMD_NETWORK_CONFIG_PATH = "/run/systemd/network/"
SYSTEMD_TIMESYNC_CONFIG_FILE = "/run/systemd/timesyncd.conf"

_IP_ADDRESS_RE = re.compile(r"inet6? (.+)/\d+ ")

_DHCP_SECTION = "[DHCP]\nClientIdentifier=mac\nRouteMetric=100\nUseMTU=true\n"


@dataclass(frozen=True)
class ConfigFile:
    """A generated configuration file: its name and contents."""

    name: str
    contents: str


def _strip_mac(hwaddr: str) -> str:
    return hwaddr.replace(":", "").lower()


def _bond_mac(bond: NetworkBond) -> str:
    if bond.hwaddr:
        return bond.hwaddr
    if not bond.members:
        raise ValueError(f"bond {bond.name!r} has neither a hwaddr nor any members")
    return bond.members[0]


def _mtu_line(mtu: int) -> str:
    return f"MTUBytes={mtu}" if mtu else ""


def _link_file(prefix: str, hwaddr: str) -> ConfigFile:
    stripped = _strip_mac(hwaddr)
    return ConfigFile(
        name=f"{prefix}-en{stripped}.link",
        contents=(
            f"[Match]\nPermanentMACAddress={hwaddr}\n\n"
            f"[Link]\nNamePolicy=\nName=en{stripped}\n"
        ),
    )


def generate_link_files(config: NetworkConfig) -> list[ConfigFile]:
    """Generate systemd.link files naming every interface and bond member by MAC."""
    files = [_link_file("00", iface.hwaddr) for iface in config.interfaces]
    files.extend(
        _link_file("01", member) for bond in config.bonds for member in bond.members
    )
    return files


def _bridge_netdev(name: str, hwaddr: str, mtu: int) -> str:
    return (
        f"[NetDev]\nName={name}\nKind=bridge\nMACAddress={hwaddr}\n{_mtu_line(mtu)}\n\n"
        "[Bridge]\nVLANFiltering=true\n"
    )


def _vlan_parent_mac(vlan: NetworkVLAN, config: NetworkConfig) -> str:
    for iface in config.interfaces:
        if iface.name == vlan.parent:
            if iface.hwaddr:
                return iface.hwaddr
            break
    for bond in config.bonds:
        if bond.name == vlan.parent:
            return _bond_mac(bond)
    return ""


def generate_netdev_files(config: NetworkConfig) -> list[ConfigFile]:
    """Generate systemd.netdev files for bridges, bonds and VLANs."""
    files: list[ConfigFile] = []

    for iface in config.interfaces:
        files.append(
            ConfigFile(
                name=f"10-br{_strip_mac(iface.hwaddr)}.netdev",
                contents=_bridge_netdev(iface.name, iface.hwaddr, iface.mtu),
            )
        )

    for bond in config.bonds:
        mac = _bond_mac(bond)
        stripped = _strip_mac(mac)
        files.append(
            ConfigFile(
                name=f"11-bn{stripped}.netdev",
                contents=(
                    f"[NetDev]\nName=bn{stripped}\nKind=bond\nMACAddress={mac}\n"
                    f"{_mtu_line(bond.mtu)}\n\n[Bond]\nMode={bond.mode}\n"
                ),
            )
        )
        files.append(
            ConfigFile(
                name=f"11-br{stripped}.netdev",
                contents=_bridge_netdev(bond.name, mac, bond.mtu),
            )
        )

    for vlan in config.vlans:
        files.append(
            ConfigFile(
                name=f"12-{vlan.name}.netdev",
                contents=(
                    f"[NetDev]\nName={vlan.name}\nKind=veth\n"
                    f"MACAddress={_vlan_parent_mac(vlan, config)}\n"
                    f"{_mtu_line(vlan.mtu)}\n\n[Peer]\nName=vl{vlan.name}\n"
                ),
            )
        )

    return files


def _process_addresses(addresses: list[str]) -> str:
    if addresses:
        lines = ["LinkLocalAddressing=ipv6"]
    else:
        lines = ["LinkLocalAddressing=no", "ConfigureWithoutCarrier=yes"]

    has_dhcp4 = "dhcp4" in addresses
    has_dhcp6 = "dhcp6" in addresses
    accept_ra = "slaac" in addresses
    lines.extend(
        f"Address={addr}" for addr in addresses if addr not in ("dhcp4", "dhcp6", "slaac")
    )

    lines.append(f"IPv6AcceptRA={str(accept_ra).lower()}")

    if has_dhcp4 and has_dhcp6:
        lines.append("DHCP=yes")
    elif has_dhcp4:
        lines.append("DHCP=ipv4")
    elif has_dhcp6:
        lines.append("DHCP=ipv6")

    return "".join(line + "\n" for line in lines)


def _process_routes(routes: list[NetworkRoute]) -> str:
    gateways = {"dhcp4": "_dhcp4", "slaac": "_ipv6ra"}
    return "".join(
        f"\n[Route]\nGateway={gateways.get(route.via, route.via)}\nDestination={route.to}\n"
        for route in routes
    )


def _network_section(dns: NetworkDNS | None, ntp: NetworkNTP | None) -> str:
    lines: list[str] = []
    if dns is not None:
        if dns.search_domains:
            lines.append("Domains=" + " ".join(dns.search_domains))
        lines.extend(f"DNS={ns}" for ns in dns.nameservers)
    if ntp is not None:
        lines.extend(f"NTP={ts}" for ts in ntp.timeservers)
    return "".join(line + "\n" for line in lines)


def generate_timesync_contents(ntp: NetworkNTP) -> str:
    """Return a timesyncd.conf body, or an empty string without timeservers."""
    if not ntp.timeservers:
        return ""
    return "[Time]\nFallbackNTP=" + " ".join(ntp.timeservers) + "\n"


def _bridge_vlan_contents(
    bridge_name: str, specific_vlan: int, additional_tags: list[int], vlans: list[NetworkVLAN]
) -> str:
    tags = set(additional_tags)
    if specific_vlan:
        tags.add(specific_vlan)
    tags.update(vlan.id for vlan in vlans if vlan.parent == bridge_name)

    if not tags:
        return ""

    parts: list[str] = []
    if specific_vlan:
        parts.append(
            f"\n[BridgeVLAN]\nPVID={specific_vlan}\nEgressUntagged={specific_vlan}\n"
        )
    parts.extend(f"\n[BridgeVLAN]\nVLAN={tag}\n" for tag in sorted(tags))
    return "".join(parts)


def _link_section(addresses: list[str]) -> str:
    if not addresses:
        return "RequiredForOnline=no"

    expects_ipv4 = False
    expects_ipv6 = False
    for addr in addresses:
        if addr == "dhcp4":
            expects_ipv4 = True
        elif addr in ("dhcp6", "slaac"):
            expects_ipv6 = True
        else:
            expects_ipv4 = expects_ipv4 or "." in addr
            expects_ipv6 = expects_ipv6 or ":" in addr

    if expects_ipv4 and expects_ipv6:
        family = "both"
    elif expects_ipv4:
        family = "ipv4"
    else:
        family = "ipv6"
    return f"RequiredForOnline=yes\nRequiredFamilyForOnline={family}"


def _addressed_network(
    name: str, addresses: list[str], routes: list[NetworkRoute], config: NetworkConfig
) -> str:
    return (
        f"[Match]\nName={name}\n\n[Link]\n{_link_section(addresses)}\n\n"
        f"{_DHCP_SECTION}\n[Network]\n{_network_section(config.dns, config.ntp)}"
        f"{_process_addresses(addresses)}{_process_routes(routes)}"
    )


def generate_network_files(config: NetworkConfig) -> list[ConfigFile]:
    """Generate systemd.network files for interfaces, bonds, members and VLANs."""
    files: list[ConfigFile] = []

    for iface in config.interfaces:
        stripped = _strip_mac(iface.hwaddr)
        files.append(
            ConfigFile(
                name=f"20-{iface.name}.network",
                contents=_addressed_network(iface.name, iface.addresses, iface.routes, config),
            )
        )
        lldp = str(bool(iface.lldp)).lower()
        files.append(
            ConfigFile(
                name=f"20-en{stripped}.network",
                contents=(
                    f"[Match]\nName=en{stripped}\n\n[Network]\nBridge={iface.name}\n"
                    f"LLDP={lldp}\nEmitLLDP={lldp}\n"
                    + _bridge_vlan_contents(
                        iface.name, iface.vlan, iface.vlan_tags, config.vlans
                    )
                ),
            )
        )

    for bond in config.bonds:
        stripped = _strip_mac(_bond_mac(bond))
        files.append(
            ConfigFile(
                name=f"21-{bond.name}.network",
                contents=_addressed_network(bond.name, bond.addresses, bond.routes, config),
            )
        )
        files.append(
            ConfigFile(
                name=f"21-bn{stripped}.network",
                contents=(
                    f"[Match]\nName=bn{stripped}\n\n[Network]\nBridge={bond.name}\n"
                    + _bridge_vlan_contents(bond.name, bond.vlan, bond.vlan_tags, config.vlans)
                ),
            )
        )
        lldp = str(bool(bond.lldp)).lower()
        for index, member in enumerate(bond.members):
            files.append(
                ConfigFile(
                    name=f"21-bn{stripped}-dev{index}.network",
                    contents=(
                        f"[Match]\nName=en{_strip_mac(member)}\n\n[Network]\n"
                        f"Bond=bn{stripped}\nLLDP={lldp}\nEmitLLDP={lldp}\n"
                    ),
                )
            )

    for vlan in config.vlans:
        files.append(
            ConfigFile(
                name=f"22-vl{vlan.name}.network",
                contents=(
                    f"[Match]\nName=vl{vlan.name}\n\n[Network]\nBridge={vlan.parent}\n\n"
                    f"[BridgeVLAN]\nVLAN={vlan.id}\nPVID={vlan.id}\nEgressUntagged={vlan.id}\n"
                ),
            )
        )
        files.append(
            ConfigFile(
                name=f"22-{vlan.name}.network",
                contents=_addressed_network(vlan.name, vlan.addresses, vlan.routes, config),
            )
        )

    return files


def write_network_configuration(
    config: NetworkConfig,
    network_dir: str | os.PathLike[str] = SYSTEMD_NETWORK_CONFIG_PATH,
    timesync_file: str | os.PathLike[str] = SYSTEMD_TIMESYNC_CONFIG_FILE,
) -> list[Path]:
    """Replace the networkd directory with freshly generated files.

    Also writes or removes the timesyncd configuration. Returns the paths written.
    """
    network_path = Path(network_dir)
    timesync_path = Path(timesync_file)

    if network_path.exists():
        shutil.rmtree(network_path)
    os.mkdir(network_path, 0o755)

    written: list[Path] = []
    for cfg in (
        *generate_link_files(config),
        *generate_netdev_files(config),
        *generate_network_files(config),
    ):
        target = network_path / cfg.name
        target.write_text(cfg.contents)
        written.append(target)

    ntp_contents = generate_timesync_contents(config.ntp) if config.ntp is not None else ""
    if ntp_contents:
        timesync_path.write_text(ntp_contents)
        written.append(timesync_path)
    else:
        try:
            timesync_path.unlink()
        except OSError:
            pass

    return written


def expected_addresses(config: NetworkConfig) -> dict[str, int]:
    """Map each addressed device name to the number of addresses it should carry."""
    devices: dict[str, int] = {}
    for item in (*config.interfaces, *config.bonds, *config.vlans):
        if item.addresses:
            devices[item.name] = len(item.addresses)
    return devices


def parse_ip_addresses(output: str) -> list[str]:
    """Extract non link-local addresses from ``ip address show`` output."""
    return [
        addr for addr in _IP_ADDRESS_RE.findall(output) if not addr.startswith("fe80:")
    ]