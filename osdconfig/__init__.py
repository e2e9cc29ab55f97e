"""Network file generation, persistent JSON state, environment, release and console text helpers."""

__version__ = "0.1.0"