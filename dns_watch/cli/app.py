"""Main CLI application."""

from __future__ import annotations

import logging
import signal
import threading
from pathlib import Path
from typing import Callable, Optional

import typer
from pydantic import ValidationError
from typing_extensions import Annotated

from ..core.errors import DnsWatchError
from ..core.models import WatchConfig
from ..notify.command import SubprocessNotifier
from ..rendering.engine import JinjaRenderer
from ..resolution.resolver import DnsResolver
from ..settings import get_settings
from ..watch.loop import WatchLoop
from .parsers import (
    infer_output,
    parse_command,
    parse_const,
    parse_file_mode,
    parse_var,
)

logger = logging.getLogger(__name__)

app = typer.Typer(
    name="dns-watch",
    help="Writes a file from a Jinja2 template with resolved IP addresses substituted in.",
    add_completion=False,
)


def _validation_message(exc: ValidationError) -> str:
    return "; ".join(str(err.get("msg", err)) for err in exc.errors())


def _stop_handler(loop: WatchLoop) -> Callable[[int, object], None]:
    """Build a signal handler that stops ``loop`` from a helper thread.

    The handler runs on the main thread, which may already hold the stop
    event's lock inside ``Event.wait``; setting the event there could block.
    """

    def _handler(signum: int, _frame: object) -> None:
        logger.info(f"Received {signal.Signals(signum).name}, stopping")
        threading.Thread(target=loop.request_stop, name="dns-watch-stop", daemon=True).start()

    return _handler


def _install_stop_handlers(loop: WatchLoop) -> None:
    _handler = _stop_handler(loop)
    signal.signal(signal.SIGTERM, _handler)
    signal.signal(signal.SIGINT, _handler)


@app.command()
def render(
    template: Annotated[
        Path,
        typer.Argument(help="Jinja2 template file.", metavar="FILE"),
    ],
    variables: Annotated[
        list[str],
        typer.Option(
            "--var",
            "-v",
            help="Define variable N as the resolved A record addresses of HOST. "
            "'--var www.example.com' is the same as '--var www.example.com:www.example.com'. Repeatable.",
            metavar="N[:HOST]",
        ),
    ] = [],
    constants: Annotated[
        list[str],
        typer.Option(
            "--const",
            "-c",
            help="Define constant N with the value VAL. Repeatable.",
            metavar="N=VAL",
        ),
    ] = [],
    out: Annotated[
        Optional[str],
        typer.Option(
            "--out",
            "-o",
            help="Output file name, or '-' for standard out. Defaults to FILE without "
            "its '.j2' suffix, or FILE with '.out' appended.",
            metavar="NAME",
        ),
    ] = None,
    watch: Annotated[
        bool,
        typer.Option("--watch", "-w", help="Keep re-resolving and re-rendering on an interval."),
    ] = False,
    command: Annotated[
        Optional[str],
        typer.Option(
            "--exec",
            "-x",
            help="Run CMD every time the output file is updated.",
            metavar="CMD",
        ),
    ] = None,
    interval: Annotated[
        Optional[float],
        typer.Option(
            "--interval",
            "-i",
            help="Seconds between DNS rechecks when watching (default: 1).",
            metavar="SECS",
        ),
    ] = None,
    timeout: Annotated[
        Optional[float],
        typer.Option(
            "--timeout",
            "-t",
            help="DNS lookup timeout in seconds (default: 1).",
            metavar="SECS",
        ),
    ] = None,
    notify_first: Annotated[
        Optional[bool],
        typer.Option(
            "--notify-first/--no-notify-first",
            help="Run CMD after the first write too (default: yes).",
        ),
    ] = None,
    quiet_command: Annotated[
        bool,
        typer.Option("--quiet-command", help="Discard the output of CMD."),
    ] = False,
    file_mode: Annotated[
        Optional[str],
        typer.Option("--mode", help="File permissions in octal (default: 0644).", metavar="OCTAL"),
    ] = None,
    debug: Annotated[
        bool,
        typer.Option("--debug", "-d", help="Enable debug output."),
    ] = False,
) -> None:
    """Render TEMPLATE with host variables resolved from DNS."""
    # Configure logging
    logging.basicConfig(
        level=logging.DEBUG if debug else logging.INFO,
        format="[%(levelname)s] %(message)s",
    )

    try:
        settings = get_settings()
        config = WatchConfig(
            bindings=[parse_var(v) for v in variables],
            constants=dict(parse_const(c) for c in constants),
            template_path=template,
            output=out if out else infer_output(template),
            notify_command=parse_command(command) if command else None,
            watch=watch,
            interval=interval if interval is not None else settings.interval,
            dns_timeout=timeout if timeout is not None else settings.timeout,
            notify_on_first=notify_first if notify_first is not None else settings.notify_first,
            quiet_command=quiet_command,
            file_mode=parse_file_mode(file_mode or settings.file_mode),
        )
    except ValidationError as exc:
        raise typer.BadParameter(_validation_message(exc)) from exc

    logger.debug(f"Config: {len(config.bindings)} variable(s), output {config.output}")

    loop = WatchLoop(
        config,
        resolver=DnsResolver(timeout=config.dns_timeout),
        renderer=JinjaRenderer(config.template_path, config.constants),
        notifier=SubprocessNotifier(quiet=config.quiet_command),
    )

    if not config.watch:
        try:
            loop.run_once()
        except DnsWatchError as exc:
            logger.error(str(exc))
            raise typer.Exit(code=1) from exc
        return

    _install_stop_handlers(loop)
    loop.run_forever()


def main() -> None:
    """Entry point for the CLI."""
    app()


if __name__ == "__main__":
    main()
