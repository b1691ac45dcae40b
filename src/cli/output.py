"""
Terminal output formatter for CLI.

Handles all display logic - no business logic, just presentation.
"""

import sys

from zos_engine.errors import TransportError, ZosClientError
from zos_engine.models import ArchivedWorkflow, ComparisonResult, DisplayMode


def print_comparison(result: ComparisonResult) -> None:
    """
    Print the outcome of a comparison.

    Args:
        result: ComparisonResult from the compare runner
    """
    if result.display_mode == DisplayMode.BROWSER:
        print(result.rendered_diff)
        return

    if not result.has_differences:
        print(f"✓ No differences between {result.source_label} and {result.target_label}.")
        return

    # The diff already ends with a newline
    print(result.rendered_diff, end="")


def print_workflow_archived(archived: ArchivedWorkflow) -> None:
    """Print the key of an archived workflow."""
    print(f"Workflow archived. Workflow key: {archived.workflow_key}")


def print_message(message: str) -> None:
    print(message)


def print_error(error: ZosClientError) -> None:
    """
    Print an error in a readable format.

    Args:
        error: Error raised by the engine
    """
    print(f"✗ {error.msg}", file=sys.stderr)

    if isinstance(error, TransportError):
        if error.resource:
            print(f"    Resource: {error.resource}", file=sys.stderr)
        if error.status_code is not None:
            print(f"    HTTP Status: {error.status_code}", file=sys.stderr)
        if error.body:
            body = error.body if len(error.body) <= 500 else f"{error.body[:500]}..."
            print(f"    Response: {body}", file=sys.stderr)
