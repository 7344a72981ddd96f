from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path

import typer

from iosenv.core.config import CONFIG_FILENAME, Config, load_config, load_config_or_default
from iosenv.core.errors import ErrorCode
from iosenv.core.result import Err
from iosenv.output.console import ConsoleProtocol, RichConsole
from iosenv.platform.detection import Platform, detect_platform


@dataclass(frozen=True, slots=True)
class CLIContext:
    platform: Platform
    config: Config
    console: ConsoleProtocol


def build_context(config_path: Path | None = None) -> CLIContext:
    # An explicit --config must exist; the implicit one is optional.
    if config_path is not None:
        config_result = load_config(config_path.expanduser())
    else:
        config_result = load_config_or_default(Path.cwd() / CONFIG_FILENAME)

    if isinstance(config_result, Err):
        typer.echo(f"error: {config_result.error.message}", err=True)
        raise typer.Exit(code=int(ErrorCode.USER_ERROR))

    return CLIContext(
        platform=detect_platform(),
        config=config_result.value,
        console=RichConsole(),
    )
