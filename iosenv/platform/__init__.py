"""Platform abstraction layer."""

from .detection import Platform, detect_platform

__all__ = [
    "Platform",
    "detect_platform",
]
