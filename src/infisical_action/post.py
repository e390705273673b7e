"""
Post step of the action: remove the exported secrets file.

Runs after the job, in its own process. A missing file or a failed delete
never fails the job.
"""
import logging
import sys
from typing import Optional

from .config.inputs import resolve_input
from .config.logging import bootstrap_logging
from .export import resolve_output_path
from .runtime import GitHubActionsContext, RunContext

logger = logging.getLogger(__name__)


def run_cleanup(context: RunContext, workspace: Optional[str] = None) -> bool:
    """Delete the exported file when the clean input is set.

    Returns:
        True if a file was deleted
    """
    should_clean = resolve_input(context, "clean")
    if not should_clean:
        context.info("Cleanup is disabled, keeping exported file")
        return False

    try:
        file_path = resolve_output_path(resolve_input(context, "file-output-path"), workspace)

        if not file_path.exists():
            context.debug(f"File not found at {file_path}, skipping cleanup")
            return False

        try:
            file_path.unlink()
        except FileNotFoundError:
            context.debug(f"File not found at {file_path}, skipping cleanup")
            return False

        context.info(f"Cleaned up exported file at {file_path}")
        return True
    except OSError as e:
        context.warning(f"Failed to clean up file: {e}")
        return False


def post(context: Optional[RunContext] = None) -> int:
    """Entry point of the post step."""
    bootstrap_logging(__name__)
    context = context or GitHubActionsContext()
    try:
        run_cleanup(context)
    except Exception as e:
        logger.debug("Cleanup step failed", exc_info=True)
        context.set_failed(str(e))
        return 1
    return 0


if __name__ == "__main__":
    sys.exit(post())
