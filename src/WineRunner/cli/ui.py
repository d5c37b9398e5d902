"""Click CLI interface definitions.

Defines the command-line interface structure and routes commands
to their respective runners.
"""

from __future__ import annotations

from pathlib import Path

import click
from dotenv import load_dotenv

from WineRunner.cli.runner import CommandRunner
from WineRunner.config import load_config


@click.group(help="WineRunner: launch programs inside a Wine prefix.")
@click.option(
    "--config",
    "config_path",
    type=click.Path(path_type=Path, dir_okay=False, exists=True),
    default=None,
    help="YAML config file layered over the built-in defaults.",
)
@click.option(
    "--prefix",
    "prefix_path",
    envvar="WINERUNNER_PREFIX",
    type=click.Path(file_okay=False),
    default=None,
    help="Prefix root. Overrides prefix.path from config.",
)
@click.pass_context
def cli(ctx: click.Context, config_path: Path | None, prefix_path: str | None) -> None:
    """CLI entry group.

    Loads environment variables from .env file before processing config.

    Args:
        ctx: Click context.
        config_path: Path to YAML config file.
        prefix_path: Prefix root from the command line or environment.
    """
    load_dotenv()

    ctx.obj = CommandRunner(load_config(config_path), prefix_path=prefix_path)


@cli.command("run")
@click.argument("program")
@click.option("--start", "use_start", is_flag=True, help="Launch through 'wine start'.")
@click.option(
    "--debug",
    multiple=True,
    metavar="[+|-]CHANNEL",
    help="Enable (+) or disable (-) a debug channel; repeat in precedence order.",
)
@click.option("--dry-run", is_flag=True, help="Print the command instead of running it.")
@click.pass_context
def run_cmd(
    ctx: click.Context,
    program: str,
    use_start: bool,
    debug: tuple[str, ...],
    dry_run: bool,
) -> None:
    """Run PROGRAM inside the prefix."""
    runner: CommandRunner = ctx.obj
    runner.run_program(
        ctx.command.name,
        program,
        use_start=use_start,
        debug=debug,
        dry_run=dry_run,
    )


@cli.command("kill")
@click.pass_context
def kill_cmd(ctx: click.Context) -> None:
    """Kill every process running in the prefix."""
    runner: CommandRunner = ctx.obj
    code = runner.kill_all(ctx.command.name)
    click.echo(f"wineserver exited with {code}")
