# ==============================================================================
# Index Commands
# ==============================================================================
"""
Sessions index management for the sessionstore CLI.
"""

from typing import Annotated

import typer

from sessionstore.cli.shared import C, I, build_session_repository, fail
from sessionstore.core.errors import StoreError


def index_init() -> None:
    """Create the sessions index with its mapping (no-op if it exists)."""
    repository = build_session_repository()
    try:
        created = repository.ensure_index()
    except StoreError as e:
        fail(f"Failed to create index '{repository.index_name}'", e)
    finally:
        repository.client.close()

    if created:
        print(f"  {C.BRIGHT_GREEN}{I.CHECK}{C.RESET} Created index '{repository.index_name}'")
    else:
        print(f"  {C.BRIGHT_GREEN}{I.CHECK}{C.RESET} Index '{repository.index_name}' already exists")


def index_reset(
    yes: Annotated[bool, typer.Option("--yes", "-y", help="Skip confirmation prompt")] = False,
) -> None:
    """Delete and recreate the sessions index. All session documents are lost."""
    repository = build_session_repository()
    try:
        if not yes:
            typer.confirm(
                f"Delete every document in '{repository.index_name}'?", abort=True
            )
        repository.delete_index()
        repository.ensure_index()
    except StoreError as e:
        fail(f"Failed to reset index '{repository.index_name}'", e)
    finally:
        repository.client.close()
    print(f"  {C.BRIGHT_GREEN}{I.CHECK}{C.RESET} Index '{repository.index_name}' reset")
