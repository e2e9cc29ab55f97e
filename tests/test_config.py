import pytest

from osdconfig.config import (
    NetworkConfig,
    NetworkDNS,
    NetworkInterface,
    NetworkRoute,
)

CONFIG1 = """
interfaces:
  - name: san1
    addresses:
      - 10.0.101.10/24
      - fd40:1234:1234:101::10/64
    hwaddr: AA:BB:CC:DD:EE:01
    roles:
      - storage

  - name: san2
    addresses:
      - 10.0.102.10/24
      - fd40:1234:1234:102::10/64
    hwaddr: AA:BB:CC:DD:EE:02
    vlan_tags:
      - 10
    roles:
      - storage

bonds:
  - name: management
    mode: 802.3ad
    mtu: 9000
    vlan: 100
    vlan_tags:
      - 1234
    addresses:
      - 10.0.100.10/24
      - fd40:1234:1234:100::10/64
    routes:
      - to: 0.0.0.0/0
        via: 10.0.100.1
      - to: ::/0
        via: fd40:1234:1234:100::1
    members:
      - AA:BB:CC:DD:EE:03
      - AA:BB:CC:DD:EE:04
    roles:
      - management
      - instances

vlans:
  - name: uplink
    parent: management
    id: 1234
    mtu: 1500
    addresses:
      - dhcp4
    routes:
      - to: 0.0.0.0/0
        via: dhcp4
    roles:
      - ovn-uplink
"""

CONFIG2 = """
interfaces:
  - name: management
    mtu: 9000
    addresses:
      - dhcp4
      - slaac
    routes:
      - to: 0.0.0.0/0
        via: dhcp4
      - to: ::/0
        via: slaac
    hwaddr: AA:BB:CC:DD:EE:01
    roles:
      - management
      - instances
"""

CONFIG3 = """
dns:
  hostname: host
  domain: example.org
  search_domains:
    - example.org
  nameservers:
    - ns1.example.org
    - ns2.example.org
ntp:
  timeservers:
    - pool.ntp.example.org
    - 10.10.10.10
proxy:
  https_proxy: https://proxy.example.org
interfaces:
  - name: eth0
    addresses:
      - dhcp4
    hwaddr: FF:EE:DD:CC:BB:AA
"""

CONFIG4 = """
bonds:
 - name: "uplink"
   mode: "802.3ad"
   hwaddr: "aa:bb:cc:dd:ee:e1"
   lldp: true
   mtu: 9000
   vlan_tags:
     - 10
   members:
    - "aa:bb:cc:dd:ee:e1"
    - "aa:bb:cc:dd:ee:e2"
   roles:
    - "instances"

vlans:
 - name: "management"
   id: 10
   parent: "uplink"
   mtu: 1500
   addresses:
    - "dhcp4"
    - "slaac"
   roles:
    - "management"
"""


def test_config1_parsing_and_round_trip():
    cfg = NetworkConfig.from_yaml(CONFIG1)

    assert len(cfg.interfaces) == 2
    assert cfg.interfaces[0].name == "san1"
    assert len(cfg.interfaces[0].addresses) == 2
    assert cfg.interfaces[0].addresses[1] == "fd40:1234:1234:101::10/64"
    assert len(cfg.interfaces[1].addresses) == 2
    assert cfg.interfaces[1].addresses[0] == "10.0.102.10/24"
    assert cfg.interfaces[1].hwaddr == "AA:BB:CC:DD:EE:02"
    assert cfg.interfaces[1].roles == ["storage"]
    assert len(cfg.bonds) == 1
    assert cfg.bonds[0].name == "management"
    assert cfg.bonds[0].mtu == 9000
    assert cfg.bonds[0].hwaddr == ""
    assert len(cfg.bonds[0].routes) == 2
    assert len(cfg.bonds[0].members) == 2
    assert cfg.bonds[0].members[0] == "AA:BB:CC:DD:EE:03"
    assert len(cfg.vlans) == 1
    assert cfg.vlans[0].name == "uplink"
    assert cfg.vlans[0].id == 1234
    assert cfg.vlans[0].addresses == ["dhcp4"]
    assert len(cfg.vlans[0].routes) == 1
    assert cfg.vlans[0].routes[0].to == "0.0.0.0/0"
    assert cfg.vlans[0].routes[0].via == "dhcp4"
    assert cfg.vlans[0].roles == ["ovn-uplink"]

    assert NetworkConfig.from_yaml(cfg.to_yaml()) == cfg


def test_config2_parsing_and_round_trip():
    cfg = NetworkConfig.from_yaml(CONFIG2)

    assert len(cfg.interfaces) == 1
    assert cfg.interfaces[0].name == "management"
    assert len(cfg.interfaces[0].addresses) == 2
    assert cfg.interfaces[0].addresses[1] == "slaac"
    assert cfg.interfaces[0].hwaddr == "AA:BB:CC:DD:EE:01"
    assert len(cfg.interfaces[0].routes) == 2
    assert cfg.interfaces[0].routes[0].to == "0.0.0.0/0"
    assert cfg.interfaces[0].routes[0].via == "dhcp4"

    assert NetworkConfig.from_yaml(cfg.to_yaml()) == cfg


def test_config3_parsing_and_round_trip():
    cfg = NetworkConfig.from_yaml(CONFIG3)

    assert cfg.dns.hostname == "host"
    assert cfg.dns.domain == "example.org"
    assert cfg.dns.search_domains == ["example.org"]
    assert cfg.dns.nameservers == ["ns1.example.org", "ns2.example.org"]
    assert cfg.ntp.timeservers == ["pool.ntp.example.org", "10.10.10.10"]
    assert cfg.proxy.https_proxy == "https://proxy.example.org"

    assert NetworkConfig.from_yaml(cfg.to_yaml()) == cfg


def test_config4_parsing_and_round_trip():
    cfg = NetworkConfig.from_yaml(CONFIG4)

    assert cfg.interfaces == []
    assert len(cfg.bonds) == 1
    assert cfg.bonds[0].name == "uplink"
    assert cfg.bonds[0].mode == "802.3ad"
    assert cfg.bonds[0].hwaddr == "aa:bb:cc:dd:ee:e1"
    assert cfg.bonds[0].lldp is True
    assert cfg.bonds[0].mtu == 9000
    assert cfg.bonds[0].members == ["aa:bb:cc:dd:ee:e1", "aa:bb:cc:dd:ee:e2"]
    assert cfg.bonds[0].roles == ["instances"]
    assert len(cfg.vlans) == 1
    assert cfg.vlans[0].name == "management"
    assert cfg.vlans[0].id == 10
    assert cfg.vlans[0].parent == "uplink"
    assert cfg.vlans[0].mtu == 1500
    assert cfg.vlans[0].addresses == ["dhcp4", "slaac"]
    assert cfg.vlans[0].roles == ["management"]

    assert NetworkConfig.from_yaml(cfg.to_yaml()) == cfg


def test_dict_round_trip_keeps_empty_sections():
    cfg = NetworkConfig(
        dns=NetworkDNS(),
        interfaces=[
            NetworkInterface(
                name="eth0",
                hwaddr="00:00:5e:00:53:01",
                routes=[NetworkRoute(to="::/0", via="slaac")],
            )
        ],
    )
    data = cfg.to_dict()
    assert data["dns"] == {}
    assert "ntp" not in data
    assert NetworkConfig.from_dict(data) == cfg


def test_empty_yaml_gives_empty_config():
    assert NetworkConfig.from_yaml("") == NetworkConfig()


def test_non_mapping_is_rejected():
    with pytest.raises(ValueError):
        NetworkConfig.from_dict(["interfaces"])


def test_non_list_interfaces_rejected():
    with pytest.raises(ValueError):
        NetworkConfig.from_dict({"interfaces": "eth0"})