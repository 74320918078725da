import os
import sys

from loguru import logger


def setup_logging(verbose=False, dry_run=False, suppress_console=None):
    """
    Configures the global logger.

    Progress messages are INFO, so they only reach the console for verbose or dry runs;
    warnings and errors are always shown.

    Args:
        verbose: Show progress messages (and DEBUG detail).
        dry_run: Show progress messages alongside the preview.
        suppress_console: If True, drop the console sink entirely. If None, check the
            MODJOOL_QUIET env var.
    """
    logger.remove()

    if suppress_console is None:
        suppress_console = os.getenv("MODJOOL_QUIET", "").lower() in ("1", "true", "yes")
    if suppress_console:
        return

    if verbose:
        level = "DEBUG"
    elif dry_run:
        level = "INFO"
    else:
        level = "WARNING"

    logger.add(
        sys.stderr,
        level=level,
        format="<level>{level: <8}</level> | <level>{message}</level>",
        colorize=None,
    )
