from __future__ import annotations

from pathlib import Path

import typer

from iosenv.cli.context import CLIContext, build_context
from iosenv.core.errors import ErrorCode
from iosenv.output.console import Style
from iosenv.services.checkers import DefaultCommandRunner, Outcome, TracingCommandRunner
from iosenv.services.doctor import DoctorService, WorkflowReport


def doctor(
    config: Path | None = typer.Option(
        None,
        "--config",
        help="Config file (default: ./iosenv.toml if present)",
    ),
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Print every probed command."),
    strict: bool = typer.Option(
        True,
        "--strict/--no-strict",
        help="Exit non-zero unless every toolchain is fully installed.",
    ),
) -> None:
    """Check the iOS toolchain and suggest fixes."""
    ctx = build_context(config)

    runner = TracingCommandRunner(DefaultCommandRunner(), ctx.console) if verbose else None
    service = DoctorService(config=ctx.config, platform=ctx.platform, runner=runner)
    report = service.run()

    ctx.console.print(f"platform: {ctx.platform}", Style.DIM)
    if not report.workflows:
        ctx.console.print("no toolchain checks apply to this platform", Style.DIM)
        return

    for entry in report.workflows:
        _print_workflow(ctx, entry)

    if strict and not report.all_installed():
        raise typer.Exit(code=int(ErrorCode.ENV_ERROR))


def _print_workflow(ctx: CLIContext, entry: WorkflowReport) -> None:
    console = ctx.console
    result = entry.result

    title = entry.title
    if result.status_info:
        title = f"{title} ({result.status_info})"

    match result.outcome:
        case Outcome.INSTALLED:
            console.success(title)
        case Outcome.PARTIAL:
            console.warning(title)
        case Outcome.MISSING:
            console.error(title)

    for message in result.messages:
        style = Style.ERROR if message.is_error else Style.DIM
        marker = "✗" if message.is_error else "•"
        console.print(_indent(f"{marker} {message.text}"), style)


def _indent(text: str, prefix: str = "    ") -> str:
    lines = text.splitlines() or [""]
    first, rest = lines[0], lines[1:]
    return "\n".join([prefix + first, *(prefix + "  " + line for line in rest)])
