"""CLI entry point for pi-lineedit. Uses Click for argument parsing."""

from __future__ import annotations

import logging
import os

import click

from pi.lineedit.history import InMemoryHistory
from pi.lineedit.session import edit_line
from pi.lineedit.settings import SettingsManager
from pi.lineedit.terminal import ProcessTerminal

logger = logging.getLogger(__name__)


def _configure_logging(level: str, log_file: str | None) -> None:
    logging.basicConfig(
        level=getattr(logging, level.upper()),
        format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
        filename=log_file,
    )


@click.command()
@click.option("--prompt", "prompt_label", default="pi", show_default=True, help="Prompt label")
@click.option("--capacity", type=int, default=None, help="Line capacity in bytes; lines hold up to capacity - 2")
@click.option("--separator", default=None, help="Text printed between prompt and line")
@click.option("--history-limit", type=int, default=None, help="Number of lines kept for up/down recall")
@click.option("--once", is_flag=True, help="Read a single line, print it and exit")
@click.option(
    "--log-level",
    default="warning",
    type=click.Choice(["debug", "info", "warning", "error"]),
    show_default=True,
)
@click.option("--log-file", default=None, help="Write log records to this file")
@click.pass_context
def main(ctx, prompt_label, capacity, separator, history_limit, once, log_level, log_file):
    """Read lines with in-place editing and echo them back."""
    _configure_logging(log_level, log_file)

    settings = SettingsManager.create(os.getcwd())
    settings.apply_overrides(
        {"capacity": capacity, "separator": separator, "historyLimit": history_limit}
    )
    history = InMemoryHistory(limit=settings.get_history_limit())
    terminal = ProcessTerminal()

    while True:
        try:
            result = edit_line(prompt_label, history=history, terminal=terminal, settings=settings)
        except EOFError:
            logger.debug("end of input")
            break

        if result.terminated:
            ctx.exit(result.exit_code)

        history.add(result.line)
        click.echo(result.line)
        if once:
            break


if __name__ == "__main__":
    main()
