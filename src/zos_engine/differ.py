"""
Line normalization and diff rendering for compared content.

Produces a deterministic unified diff between two text buffers, optionally
colored for the terminal.
"""

import difflib
import io

from rich.console import Console
from rich.text import Text

from .errors import ValidationError
from .models import DEFAULT_SEQUENCE_NUMBER_WIDTH

DIFF_STYLES = {
    "+": "green",
    "-": "red",
    "@": "cyan",
}


def normalize(
    content: str,
    strip_sequence_numbers: bool,
    width: int = DEFAULT_SEQUENCE_NUMBER_WIDTH,
) -> str:
    """
    Optionally remove the trailing sequence number field from every line.

    Lines shorter than the width become empty; this mirrors how fixed-width
    sequence numbers are dropped and is left as is.

    Args:
        content: Text to normalize
        strip_sequence_numbers: Whether to strip the trailing field
        width: Width of the sequence number field

    Returns:
        Normalized text
    """
    if not strip_sequence_numbers:
        return content
    if not isinstance(width, int) or width <= 0:
        raise ValidationError(f"Sequence number width must be a positive integer: {width}")

    return "\n".join(line[:-width] for line in content.split("\n"))


class DiffRenderer:
    """
    Renders the difference between two strings as a patch.

    Identical inputs always produce identical output; equal strings produce
    an empty diff.
    """

    def __init__(self, context_lines: int = 3) -> None:
        """
        Initialize the diff renderer.

        Args:
            context_lines: Number of unchanged lines shown around each change
        """
        if context_lines < 0:
            raise ValidationError(f"Context lines must not be negative: {context_lines}")
        self.context_lines = context_lines

    def render(
        self,
        a: str,
        b: str,
        from_label: str = "a",
        to_label: str = "b",
        colorize: bool = False,
    ) -> str:
        """
        Compute the diff between a and b.

        Args:
            a: Original text
            b: Changed text
            from_label: Name shown in the --- header
            to_label: Name shown in the +++ header
            colorize: Emit ANSI colors for a terminal

        Returns:
            Unified diff text, empty when a and b are equal
        """
        if a is None or b is None:
            raise ValidationError("Both strings to compare must be defined")

        lines = list(
            difflib.unified_diff(
                self._split(a),
                self._split(b),
                fromfile=from_label,
                tofile=to_label,
                n=self.context_lines,
                lineterm="",
            )
        )
        if not lines:
            return ""
        if colorize:
            return self._colorize(lines)
        return "\n".join(lines) + "\n"

    @staticmethod
    def _split(text: str) -> list[str]:
        # Keep a trailing empty element so a missing final newline shows up
        return text.split("\n") if text else []

    @staticmethod
    def _colorize(lines: list[str]) -> str:
        text = Text()
        for line in lines:
            if line.startswith(("---", "+++")):
                style = "bold"
            else:
                style = DIFF_STYLES.get(line[:1], "")
            text.append(line, style=style)
            text.append("\n")

        buffer = io.StringIO()
        console = Console(
            file=buffer,
            force_terminal=True,
            color_system="standard",
            highlight=False,
            width=max(80, max(len(line) for line in lines) + 1),
        )
        console.print(text, end="", soft_wrap=True)
        return buffer.getvalue()
