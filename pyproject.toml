[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "osdconfig"
version = "0.1.0"
description = "systemd-networkd configuration generation, persistent JSON state and console text helpers for an appliance OS daemon"
requires-python = ">=3.10"
keywords = ["systemd-networkd", "network", "configuration", "bridge", "bond", "vlan", "timesyncd"]
classifiers = [
    "Development Status :: 4 - Beta",
    "Intended Audience :: System Administrators",
    "Operating System :: POSIX :: Linux",
    "Programming Language :: Python :: 3",
    "Programming Language :: Python :: 3 :: Only",
    "Programming Language :: Python :: 3.10",
    "Programming Language :: Python :: 3.11",
    "Programming Language :: Python :: 3.12",
    "Programming Language :: Python :: 3.13",
    "Topic :: System :: Networking",
]
dependencies = [
    "pyyaml",
]

[project.optional-dependencies]
test = [
    "pytest",
]

[tool.hatch.build.targets.wheel]
packages = ["osdconfig"]

[tool.pytest.ini_options]
testpaths = ["tests"]
addopts = "-ra"

[tool.ruff]
line-length = 100
target-version = "py310"
