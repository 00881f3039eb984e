# ==============================================================================
# Config Commands
# ==============================================================================
"""
Configuration commands for the sessionstore CLI.
"""

import json
from typing import Annotated

import typer

from sessionstore.cli.shared import C
from sessionstore.utils.config import get_settings


def _mask(secret: str | None) -> str:
    return "********" if secret else "(not set)"


def config_show(
    json_output: Annotated[
        bool, typer.Option("--json", "-j", help="Output configuration as JSON")
    ] = False,
) -> None:
    """Display current configuration (secrets are masked)."""
    settings = get_settings()
    config = {
        "opensearch": {
            "host": settings.opensearch.host,
            "port": settings.opensearch.port,
            "ssl_enabled": settings.opensearch.use_ssl,
            "verify_certs": settings.opensearch.verify_certs,
            "user": settings.opensearch.user,
            "sessions_index": settings.opensearch.sessions_index,
            "refresh": settings.opensearch.refresh,
        },
        "valkey": {
            "host": settings.valkey.host,
            "port": settings.valkey.port,
            "db": settings.valkey.db,
            "ssl_enabled": settings.valkey.ssl,
            "session_ttl_hours": settings.valkey.session_ttl_hours,
            "key_prefix": settings.valkey.key_prefix,
        },
        "auth": {
            "access_cookie": settings.auth.access_cookie,
            "access_secret": _mask(settings.auth.access_secret),
            "refresh_cookie": settings.auth.refresh_cookie,
            "refresh_secret": _mask(settings.auth.refresh_secret),
        },
        "log_level": settings.log_level,
    }

    if json_output:
        print(json.dumps(config, indent=2))
        return

    print()
    print(f"{C.BOLD}Configuration{C.RESET}")
    for section, values in config.items():
        print()
        if not isinstance(values, dict):
            print(f"{C.CYAN}{section}{C.RESET}  {C.WHITE}{values}{C.RESET}")
            continue
        print(f"{C.CYAN}{section}{C.RESET}")
        for key, value in values.items():
            print(f"  {key + ':':<20}{C.WHITE}{value}{C.RESET}")
    print()
