"""Module-level constants for the Obsidian diff-edit MCP server."""

from pathlib import Path

# Configuration
CONFIG_PATH = Path(__file__).parent.parent / "vaults.yaml"
CONFIG_ENV_VAR = "OBSIDIAN_DIFF_EDIT_CONFIG"

# Diff rendering
DEFAULT_CONTEXT_LINES = 3

# Snippet (fuzzy anchor) edits
ANCHOR_LENGTH = 32
ANCHOR_MATCH_THRESHOLD = 0.75
DEFAULT_MAX_PATCH_STEPS = 8

# Rollback is limited to markdown notes
ROLLBACK_SUFFIX = ".md"

# Logging
LOG_LEVEL = "INFO"
