"""agentmounts command-line application.

The root callback configures logging; subcommands load Settings through
get_settings(), which caches them on the root context.
"""

from typing import Annotated

import typer

from agentmounts import __version__
from agentmounts.cli.commands import config, plan, scan, setup, workspaces
from agentmounts.utils.log import configure_logging

# Create main Typer app
app = typer.Typer(
    name="agentmounts",
    help="Discover agent workspaces and run sandboxes with narrow mounts.",
    no_args_is_help=True,
    rich_markup_mode="rich",
    context_settings={"help_option_names": ["-h", "--help"]},
)


def version_callback(value: bool) -> None:
    """Print version and exit."""
    if value:
        typer.echo(f"agentmounts version {__version__}")
        raise typer.Exit()


@app.callback()
def main(
    ctx: typer.Context,
    version: Annotated[
        bool | None,
        typer.Option(
            "--version",
            "-V",
            callback=version_callback,
            is_eager=True,
            help="Show version and exit.",
        ),
    ] = None,
    verbose: Annotated[
        bool,
        typer.Option(
            "--verbose",
            "-v",
            help="Show debug logging (unreadable directories, docker commands).",
        ),
    ] = False,
    quiet: Annotated[
        bool,
        typer.Option(
            "--quiet",
            "-q",
            help="Only log warnings and errors.",
        ),
    ] = False,
) -> None:
    """agentmounts - find .claude/agents workspaces and mount only those.

    Run a broad scan once inside a disposable container, then start the
    real workload with its mounts narrowed to the workspaces found.
    """
    configure_logging(verbose=verbose, quiet=quiet)

    ctx.ensure_object(dict)
    ctx.obj["verbose"] = verbose
    ctx.obj["quiet"] = quiet


# Register commands
app.command(name="scan")(scan.scan_workspaces)
app.command(name="plan")(plan.plan_mounts_command)
app.command(name="setup")(setup.setup_sandbox)
app.add_typer(workspaces.app, name="workspaces")
app.add_typer(config.app, name="config")


if __name__ == "__main__":
    app()
