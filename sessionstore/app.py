# ==============================================================================
# Session Store CLI
# ==============================================================================
"""
Command-line interface for operating the session store.

Usage:
    sessionstore --help
    sessionstore status
    sessionstore config show
    sessionstore index init
    sessionstore index reset -y
    sessionstore sessions ids USER WEBSITE --today
    sessionstore sessions show USER SESSION
    sessionstore sessions events USER SESSION --limit 20 --skip 0
    sessionstore sessions first-seen SESSION
"""

import logging
import os
import warnings

import typer

# Suppress noisy warnings before any imports
warnings.filterwarnings("ignore", category=DeprecationWarning)

# Set consistent terminal width for help output formatting
if "COLUMNS" not in os.environ:
    os.environ["COLUMNS"] = "115"

app = typer.Typer(
    name="sessionstore",
    help="Analytics session store operations CLI",
    no_args_is_help=True,
    rich_markup_mode="rich",
)


@app.callback()
def main(
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Enable debug logging"),
) -> None:
    """Analytics session store operations CLI"""
    from sessionstore.utils.config import get_settings

    level = logging.DEBUG if verbose else get_settings().log_level.upper()
    logging.basicConfig(
        level=level,
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
    )


config_app = typer.Typer(
    help="Configuration management",
    no_args_is_help=True,
)
app.add_typer(config_app, name="config")

# Register config commands from cli.config module
from sessionstore.cli.config import config_show

config_app.command("show")(config_show)

index_app = typer.Typer(
    help="Sessions index management",
    no_args_is_help=True,
)
app.add_typer(index_app, name="index")

# Register index commands from cli.index module
from sessionstore.cli.index import index_init, index_reset

index_app.command("init")(index_init)
index_app.command("reset")(index_reset)

sessions_app = typer.Typer(
    help="Session lookups",
    no_args_is_help=True,
)
app.add_typer(sessions_app, name="sessions")

# Register session commands from cli.sessions module
from sessionstore.cli.sessions import (
    sessions_events,
    sessions_first_seen,
    sessions_ids,
    sessions_show,
)

sessions_app.command("ids")(sessions_ids)
sessions_app.command("show")(sessions_show)
sessions_app.command("events")(sessions_events)
sessions_app.command("first-seen")(sessions_first_seen)

# Status command is imported from sessionstore.cli.status
from sessionstore.cli.status import show_status

app.command("status")(show_status)


if __name__ == "__main__":
    app()
