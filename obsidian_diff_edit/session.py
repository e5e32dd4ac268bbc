"""Server-lifetime state: vault resolution and the rollback store."""

from typing import Optional

from obsidian_diff_edit.config import get_vault_configuration
from obsidian_diff_edit.data_models import VaultMetadata
from obsidian_diff_edit.rollback import RollbackStore

# One store per server process; operations receive it as an argument.
_ROLLBACK_STORE = RollbackStore()


def get_rollback_store() -> RollbackStore:
    """Return the rollback store owned by this server process."""
    return _ROLLBACK_STORE


def resolve_vault(vault: Optional[str]) -> VaultMetadata:
    """Resolve which vault metadata should be used for an operation.

    Args:
        vault: Optional friendly vault name provided directly by the caller.

    Returns:
        The resolved :class:`VaultMetadata`, falling back to the configured
        default vault.

    Raises:
        ValueError: If the supplied ``vault`` name is not recognized.
    """
    configuration = get_vault_configuration()
    if vault:
        return configuration.get(vault)
    return configuration.get(configuration.default_vault)
