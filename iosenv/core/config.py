"""Typed configuration loading and access.

The checker runs with built-in minimums; an optional ``iosenv.toml`` can
override them:

    [xcode]
    required_major = 7
    required_minor = 0

    [minimums]
    ios_deploy = "1.9.0"
    cocoapods = "1.0.0"

    [python]
    interpreter = "python"
    module = "six"

    [probe]
    timeout = 30.0
"""

from __future__ import annotations

from collections.abc import Callable, Mapping
from dataclasses import dataclass, field
from pathlib import Path
from typing import TypeVar

from .result import Err, Ok, Result
from .structured import StrDict, as_str_dict, get_float, get_int, get_str, get_table
from .versions import ParseError, Version

T = TypeVar("T")

__all__ = [
    "CONFIG_FILENAME",
    "Config",
    "ConfigError",
    "MinimumsConfig",
    "ProbeConfig",
    "PythonConfig",
    "XcodeConfig",
    "load_config",
    "load_config_or_default",
    # Defaults
    "XCODE_REQUIRED_MAJOR",
    "XCODE_REQUIRED_MINOR",
    "IOS_DEPLOY_MIN_VERSION",
    "COCOAPODS_MIN_VERSION",
]

CONFIG_FILENAME = "iosenv.toml"

XCODE_REQUIRED_MAJOR = 7
XCODE_REQUIRED_MINOR = 0
IOS_DEPLOY_MIN_VERSION = "1.9.0"
COCOAPODS_MIN_VERSION = "1.0.0"


@dataclass(frozen=True, slots=True)
class ConfigError:
    """Error when config cannot be loaded or parsed."""

    message: str
    path: Path | None = None


@dataclass(frozen=True, slots=True)
class XcodeConfig:
    """Minimum Xcode release, as major.minor."""

    required_major: int = XCODE_REQUIRED_MAJOR
    required_minor: int = XCODE_REQUIRED_MINOR

    @property
    def required_text(self) -> str:
        return f"{self.required_major}.{self.required_minor}.0"


@dataclass(frozen=True, slots=True)
class MinimumsConfig:
    """Minimum versions for Homebrew-installed tools."""

    ios_deploy: Version = field(default_factory=lambda: Version.parse(IOS_DEPLOY_MIN_VERSION))
    cocoapods: Version = field(default_factory=lambda: Version.parse(COCOAPODS_MIN_VERSION))


@dataclass(frozen=True, slots=True)
class PythonConfig:
    """Interpreter and module probed by the python check."""

    interpreter: str = "python"
    module: str = "six"


@dataclass(frozen=True, slots=True)
class ProbeConfig:
    """External command settings.

    Attributes:
        timeout: Seconds before a probed command is abandoned (None = wait forever).
    """

    timeout: float | None = None


@dataclass(frozen=True, slots=True)
class Config:
    """Main configuration container."""

    xcode: XcodeConfig = field(default_factory=XcodeConfig)
    minimums: MinimumsConfig = field(default_factory=MinimumsConfig)
    python: PythonConfig = field(default_factory=PythonConfig)
    probe: ProbeConfig = field(default_factory=ProbeConfig)

    @classmethod
    def from_dict(cls, data: Mapping[str, object]) -> Config:
        """Create Config from parsed TOML.

        Raises:
            ValueError: If a value has the wrong type or is out of range.
            ParseError: If a minimum version is not a dotted number.
        """
        xcode = _section(data, "xcode")
        minimums = _section(data, "minimums")
        python = _section(data, "python")
        probe = _section(data, "probe")

        major = _optional(xcode, "xcode", "required_major", get_int, "an integer")
        minor = _optional(xcode, "xcode", "required_minor", get_int, "an integer")
        if (major is not None and major < 0) or (minor is not None and minor < 0):
            raise ValueError("xcode.required_major/required_minor must be >= 0")

        timeout = _optional(probe, "probe", "timeout", get_float, "a number")
        if timeout is not None and timeout <= 0:
            raise ValueError("probe.timeout must be > 0")

        ios_deploy = _optional(minimums, "minimums", "ios_deploy", get_str, "a version string")
        cocoapods = _optional(minimums, "minimums", "cocoapods", get_str, "a version string")
        interpreter = _optional(python, "python", "interpreter", get_str, "a non-empty string")
        module = _optional(python, "python", "module", get_str, "a non-empty string")

        return cls(
            xcode=XcodeConfig(
                required_major=XCODE_REQUIRED_MAJOR if major is None else major,
                required_minor=XCODE_REQUIRED_MINOR if minor is None else minor,
            ),
            minimums=MinimumsConfig(
                ios_deploy=Version.parse(ios_deploy or IOS_DEPLOY_MIN_VERSION),
                cocoapods=Version.parse(cocoapods or COCOAPODS_MIN_VERSION),
            ),
            python=PythonConfig(
                interpreter=interpreter or "python",
                module=module or "six",
            ),
            probe=ProbeConfig(timeout=timeout),
        )


def _section(data: Mapping[str, object], name: str) -> StrDict:
    """Get an optional table; a present non-table value is an error."""
    if name not in data:
        return {}
    table = get_table(data, name)
    if table is None:
        raise ValueError(f"[{name}] must be a table")
    return table


def _optional(
    table: StrDict,
    section: str,
    key: str,
    getter: Callable[[Mapping[str, object], str], T | None],
    expected: str,
) -> T | None:
    """Read an optional value; a present value of the wrong type is an error."""
    value = getter(table, key)
    if value is None and key in table:
        raise ValueError(f"{section}.{key} must be {expected}")
    return value


def _parse_toml(path: Path) -> Result[StrDict, ConfigError]:
    """Parse a TOML file, handling read and syntax errors."""
    import tomllib

    try:
        data = as_str_dict(tomllib.loads(path.read_bytes().decode("utf-8")))
        if data is None:
            return Err(ConfigError("Config root must be a TOML table", path=path))
        return Ok(data)
    except FileNotFoundError:
        return Err(ConfigError(f"Config file not found: {path}", path=path))
    except PermissionError:
        return Err(ConfigError(f"Permission denied reading: {path}", path=path))
    except tomllib.TOMLDecodeError as e:
        return Err(ConfigError(f"Invalid TOML syntax: {e}", path=path))
    except UnicodeDecodeError as e:
        return Err(ConfigError(f"Error reading config: {e}", path=path))


def load_config(path: Path) -> Result[Config, ConfigError]:
    """Load and parse configuration from a TOML file.

    Returns:
        Ok(Config) on success, Err(ConfigError) on failure
    """
    result = _parse_toml(path)
    if isinstance(result, Err):
        return result

    try:
        return Ok(Config.from_dict(result.value))
    except ParseError as e:
        return Err(ConfigError(f"Invalid minimum version: {e}", path=path))
    except ValueError as e:
        return Err(ConfigError(f"Invalid config structure: {e}", path=path))


def load_config_or_default(path: Path) -> Result[Config, ConfigError]:
    """Load config if the file exists, else return the defaults.

    A file that exists but cannot be parsed is still an error.
    """
    if not path.exists():
        return Ok(Config())
    return load_config(path)
