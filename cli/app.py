"""Typer application factory for the ksuid command."""

from datetime import timezone
from typing import List, Optional
from zoneinfo import ZoneInfo

import typer

from cli.printers import Format, render
from config import load_config
from core.errors import InvalidArgument
from core.generator import Generator
from core.ksuid import STRING_LENGTH, TOTAL_BYTES, Ksuid
from internal.logging import LogLevel, StructuredLogger, get_logger


def resolve_timezone(name):
    """Map a configured timezone name to a tzinfo. 'local' means the system zone (None)."""
    if not name or name == "local":
        return None
    if name.upper() == "UTC":
        return timezone.utc
    return ZoneInfo(name)


def create_app(config=None, generator=None):
    """Create and configure the ksuid command."""
    config = config or load_config()

    StructuredLogger.configure(min_level=LogLevel.parse(config.logging.level))
    log = get_logger("cli")

    generator = generator or Generator()
    tz = resolve_timezone(config.cli.timezone)

    app = typer.Typer(
        add_completion=False,
        context_settings={"help_option_names": ["-h", "--help"]},
        help="Generate KSUIDs, or inspect the KSUIDs given as arguments.",
    )

    @app.command()
    def ksuid(
        ctx: typer.Context,
        ids: Optional[List[str]] = typer.Argument(None, help="KSUID strings to parse instead of generating."),
        count: int = typer.Option(
            config.cli.count, "-n", min=0,
            help="Number of KSUIDs to generate when called with no other arguments.",
        ),
        fmt: Format = typer.Option(Format(config.cli.format), "-f", help="Output format."),
        template: str = typer.Option(config.cli.template, "-t", help="The Go template used to format the output."),
        verbose: bool = typer.Option(False, "-v", help="Turn on verbose mode."),
    ):
        ksuids = []
        if not ids:
            ksuids.extend(generator.new_ksuid() for _ in range(count))
            log.debug("Generated KSUIDs", count=count)

        for arg in ids or []:
            try:
                ksuids.append(Ksuid.from_string(arg))
            except InvalidArgument as exc:
                log.warn("Invalid KSUID argument", error=exc, arg=arg, **exc.context)
                typer.echo(
                    f'Error when parsing "{arg}": Valid encoded KSUIDs are base62 strings of '
                    f"{TOTAL_BYTES} bytes, canonically {STRING_LENGTH} characters"
                )
                typer.echo(ctx.get_usage())
                raise typer.Exit(code=1) from exc

        for value in ksuids:
            if verbose:
                typer.echo(f"{value}: ", nl=False)
            output = render(fmt, value, template, tz)
            typer.echo(output, nl=not isinstance(output, bytes))

    return app
