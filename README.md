# osdconfig

Building blocks for an appliance OS daemon: it turns a YAML network
description into systemd-networkd and systemd-timesyncd files, keeps the
daemon's persistent state in a JSON file, manages proxy variables in an
environment file, reads the running release from os-release, and offers
small text helpers for a console status view.

## Install

    pip install osdconfig

Requires Python 3.10 or later and PyYAML.

## Network configuration

`osdconfig.config.NetworkConfig` describes interfaces, bonds, VLANs, DNS,
NTP and proxy settings. It is built with `NetworkConfig.from_yaml(text)`
or `NetworkConfig.from_dict(data)`, and written back with `to_yaml()` or
`to_dict()`; empty and zero values are left out, so a round trip loses
nothing.

```python
from osdconfig.config import NetworkConfig
from osdconfig.networkd import (
    generate_link_files,
    generate_netdev_files,
    generate_network_files,
    write_network_configuration,
)

config = NetworkConfig.from_yaml("""
interfaces:
  - name: management
    addresses:
      - dhcp4
      - slaac
    hwaddr: 00:00:5E:00:53:01
""")

for cfg in generate_network_files(config):
    print(cfg.name)
    print(cfg.contents)

written = write_network_configuration(
    config, "/run/systemd/network/", "/run/systemd/timesyncd.conf"
)
```

`osdconfig.networkd` generates `ConfigFile` objects (`name`, `contents`):

- `generate_link_files(config)` – `.link` files renaming each interface and
  bond member to `en<mac>` by its permanent MAC address.
- `generate_netdev_files(config)` – a VLAN-filtering bridge for every
  interface and bond, a bond device for every bond, and a veth pair for
  every VLAN.
- `generate_network_files(config)` – `.network` files with addresses,
  DHCP, SLAAC, routes, DNS, NTP and bridge VLAN settings. The special
  address values `dhcp4`, `dhcp6` and `slaac`, and the route gateways
  `dhcp4` and `slaac`, are understood.
- `generate_timesync_contents(ntp)` – a timesyncd body with the configured
  timeservers as fallback, or an empty string.

`write_network_configuration(config, network_dir, timesync_file)` removes
and recreates `network_dir`, writes all generated files into it, writes
the timesyncd file when there are timeservers and removes it otherwise,
and returns the paths it wrote. The defaults are `/run/systemd/network/`
and `/run/systemd/timesyncd.conf`.

`expected_addresses(config)` maps each device that has addresses to how
many it should carry, and `parse_ip_addresses(output)` extracts the
non-link-local addresses from `ip address show` output.

## State

```python
from osdconfig.state import load_or_create

state = load_or_create("/var/lib/osd/state.json")
state.os_release.running_release = "202501010000"
state.save()
```

`load_or_create` creates an empty state file (mode 0600) when none exists.
`State` holds `applications` (name to `Application(initialized, version)`),
`os_release` (`OSRelease(running_release, next_release)`), and the
`services` and `system` sections as plain mappings that are written back
unchanged.

## Other helpers

- `osdconfig.environment.update_environment(proxy, path="/etc/environment")`
  deletes the environment file, unsets `http_proxy`, `https_proxy` and
  `no_proxy` in the process, then writes and exports every non-empty
  setting of the given `NetworkProxy` (or nothing when it is `None`).
- `osdconfig.release.get_current_release(path="/lib/os-release")` returns
  `IMAGE_VERSION` without quotes, raising `ReleaseNotFoundError` when it is
  absent.
- `osdconfig.logger.CompactHandler(stream=None, level=NOTSET)` is a
  `logging` handler that drops debug records and writes lines such as
  `2024-01-02 03:04:05 WARN: message key=value`, with `extra` fields sorted
  by key; `format_record(record)` gives the same line as a string.
- `osdconfig.progress.ProgressBar(maximum=100, filled_char=..., empty_char=..., vertical=False)`
  keeps its progress between 0 and the maximum (`progress`,
  `add_progress`, `complete`) and `render(width, height)` returns rows of
  characters, filling from the left or, when vertical, from the bottom.
- `osdconfig.display` has `wrap_footer_text(label, text, max_line_length)`
  (lines returned last first), `colorize_log_line(line)` for warning and
  error lines, and `format_applications(applications)` for sorted
  `name(version)` entries.

## What it does not do

The package only produces files, state and text. It does not run any
commands: it does not restart systemd-networkd or timesyncd, set the
hostname, wait for interfaces to come online, apply system updates, or
manage storage services, disk encryption keys or storage pools. It has no
daemon, no command-line entry point and no interactive console screen;
the display helpers only prepare strings for one.