"""iosenv: iOS toolchain readiness checker."""

__version__ = "0.1.0"
