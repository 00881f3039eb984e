# ==============================================================================
# Status Command
# ==============================================================================
"""
Status command for the sessionstore CLI.

Checks that OpenSearch and Valkey are reachable and that the sessions
index exists. Output is either human-readable or JSON.

Includes light retry logic (3 attempts, ~7 seconds) for network resilience
when checking service status.
"""

import json as json_module
import logging
from typing import Annotated, Any

import typer
from opensearchpy.exceptions import ConnectionError as OpenSearchConnectionError
from redis.exceptions import ConnectionError as RedisConnectionError
from redis.exceptions import TimeoutError as RedisTimeoutError

from sessionstore.cli.shared import C, I
from sessionstore.infrastructure.cache import get_valkey_client
from sessionstore.infrastructure.repositories import get_opensearch_client
from sessionstore.utils.config import get_settings
from sessionstore.utils.retry import retry_light

logger = logging.getLogger(__name__)


# ==============================================================================
# Data Collection
# ==============================================================================


@retry_light((OpenSearchConnectionError,), logger)
def _probe_opensearch() -> dict[str, Any]:
    settings = get_settings()
    client = get_opensearch_client(settings)
    try:
        info = client.info()
        index = settings.opensearch.sessions_index
        exists = bool(client.indices.exists(index=index))
        documents = client.count(index=index)["count"] if exists else 0
    finally:
        client.close()
    return {
        "cluster": info.get("cluster_name", "unknown"),
        "index": index,
        "index_exists": exists,
        "documents": documents,
    }


@retry_light((RedisConnectionError, RedisTimeoutError), logger)
def _probe_valkey() -> dict[str, Any]:
    client = get_valkey_client()
    try:
        client.ping()
        keys = client.dbsize()
    finally:
        client.close()
    return {"keys": keys}


def _collect(name: str, probe) -> dict[str, Any]:
    try:
        return {"reachable": True, **probe()}
    except Exception as e:
        logger.debug("%s probe failed: %s", name, e)
        return {"reachable": False, "error": str(e)}


# ==============================================================================
# Command
# ==============================================================================


def show_status(
    json_output: Annotated[bool, typer.Option("--json", "-j", help="Output status as JSON")] = False,
) -> None:
    """Show service connectivity and sessions index status."""
    status = {
        "opensearch": _collect("opensearch", _probe_opensearch),
        "valkey": _collect("valkey", _probe_valkey),
    }

    if json_output:
        print(json_module.dumps(status, indent=2))
    else:
        print()
        print(f"  {C.BOLD}Services{C.RESET}")
        opensearch = status["opensearch"]
        if opensearch["reachable"]:
            index_state = (
                f"{opensearch['documents']:,} documents"
                if opensearch["index_exists"]
                else f"{C.BRIGHT_YELLOW}index missing{C.RESET}"
            )
            print(
                f"  {C.BRIGHT_GREEN}{I.CHECK}{C.RESET} OpenSearch  "
                f"{C.WHITE}{opensearch['index']}{C.RESET} ({index_state})"
            )
        else:
            print(f"  {C.BRIGHT_RED}{I.CROSS}{C.RESET} OpenSearch  {C.DIM}{opensearch['error']}{C.RESET}")

        valkey = status["valkey"]
        if valkey["reachable"]:
            print(f"  {C.BRIGHT_GREEN}{I.CHECK}{C.RESET} Valkey      {valkey['keys']:,} keys")
        else:
            print(f"  {C.BRIGHT_RED}{I.CROSS}{C.RESET} Valkey      {C.DIM}{valkey['error']}{C.RESET}")
        print()

    if not all(service["reachable"] for service in status.values()):
        raise typer.Exit(1)
