from __future__ import annotations

from rich.console import Console

# Console for human-facing command output (tables, env dumps).
# Logging owns its own console in archivarr.logger.console.
RENDER = Console(soft_wrap=True, highlight=False)
