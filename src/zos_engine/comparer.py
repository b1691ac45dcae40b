"""
Compare runner for orchestrating the content comparison pipeline.

Loads both sides, normalizes them and renders the diff.
"""

import asyncio
import logging

import httpx

from .browser import BrowserDiffViewer
from .differ import DiffRenderer, normalize
from .errors import ValidationError
from .fetcher import (
    DataSetFetcher,
    FetchOptions,
    RemoteFetcher,
    SpoolFetcher,
    UssFileFetcher,
    load_local_file,
)
from .models import (
    CompareOptions,
    ComparisonInput,
    ComparisonResult,
    DisplayMode,
    Session,
    SourceKind,
    SourceSpec,
)

logger = logging.getLogger(__name__)

BROWSER_MESSAGE = "Launching {source} and {target} diffs in browser..."


class CompareRunner:
    """
    Orchestrates the full pipeline for comparing two pieces of content.

    Each side can be a local file, a USS file, a data set or a spool file.
    The session is only needed when one of the sides is remote.
    """

    def __init__(
        self,
        session: Session | None = None,
        transport: httpx.AsyncBaseTransport | None = None,
        viewer: BrowserDiffViewer | None = None,
    ):
        """
        Initialize the compare runner.

        Args:
            session: Authenticated session for remote sides
            transport: Optional httpx transport (used by tests)
            viewer: Browser viewer used in browser display mode
        """
        self.session = session
        self.viewer = viewer or BrowserDiffViewer()
        self.fetchers: dict[SourceKind, RemoteFetcher] = {
            SourceKind.USS_FILE: UssFileFetcher(transport=transport),
            SourceKind.DATA_SET: DataSetFetcher(transport=transport),
            SourceKind.SPOOL_DD: SpoolFetcher(transport=transport),
        }

    async def compare(
        self,
        source: SourceSpec,
        target: SourceSpec,
        options: CompareOptions | None = None,
    ) -> ComparisonResult:
        """
        Compare two sources.

        Args:
            source: First side of the comparison
            target: Second side of the comparison
            options: Normalization and display options

        Returns:
            ComparisonResult with the rendered diff or a browser confirmation
        """
        options = options or CompareOptions()
        logger.debug("Comparing %s %s with %s %s", source.kind.value, source.label,
                     target.kind.value, target.label)

        source_content = await self._load(source, options)
        target_content = await self._load(target, options)

        return await self.compare_content(
            ComparisonInput(
                source_content=source_content,
                target_content=target_content,
                strip_sequence_numbers=options.strip_sequence_numbers,
                sequence_number_width=options.sequence_number_width,
            ),
            options,
            source_label=source.label,
            target_label=target.label,
        )

    async def compare_content(
        self,
        comparison: ComparisonInput,
        options: CompareOptions | None = None,
        source_label: str = "a",
        target_label: str = "b",
    ) -> ComparisonResult:
        """
        Normalize already loaded content and render the difference.

        Content is decoded as UTF-8 with replacement characters, so bytes that
        are not valid UTF-8 all render as U+FFFD. Two sides that differ only in
        such bytes (binary transfers, for instance) compare as equal.

        Args:
            comparison: Raw content of both sides and normalization settings
            options: Display options
            source_label: Name of the first side
            target_label: Name of the second side

        Returns:
            ComparisonResult
        """
        options = options or CompareOptions()
        if comparison.source_content is None or comparison.target_content is None:
            raise ValidationError("Both contents to compare must be defined")

        source_text = normalize(
            comparison.source_content.decode("utf-8", errors="replace"),
            comparison.strip_sequence_numbers,
            comparison.sequence_number_width,
        )
        target_text = normalize(
            comparison.target_content.decode("utf-8", errors="replace"),
            comparison.strip_sequence_numbers,
            comparison.sequence_number_width,
        )

        if options.display_mode == DisplayMode.BROWSER:
            await self.viewer.open(source_text, target_text, source_label, target_label)
            return ComparisonResult(
                success=True,
                rendered_diff=BROWSER_MESSAGE.format(source=source_label, target=target_label),
                display_mode=DisplayMode.BROWSER,
                source_label=source_label,
                target_label=target_label,
            )

        renderer = DiffRenderer(context_lines=options.context_lines)
        rendered = renderer.render(
            source_text,
            target_text,
            from_label=source_label,
            to_label=target_label,
            colorize=options.colorize,
        )
        return ComparisonResult(
            success=True,
            rendered_diff=rendered,
            display_mode=DisplayMode.TERMINAL,
            source_label=source_label,
            target_label=target_label,
        )

    def run_compare(
        self,
        source: SourceSpec,
        target: SourceSpec,
        options: CompareOptions | None = None,
    ) -> ComparisonResult:
        """
        Run a comparison synchronously.

        Convenience method that wraps compare.
        """
        return asyncio.run(self.compare(source, target, options))

    async def _load(self, spec: SourceSpec, options: CompareOptions) -> bytes:
        """
        Load the content of one side.

        Args:
            spec: Description of the side
            options: Compare options (for the response timeout)

        Returns:
            Raw content
        """
        if spec.kind == SourceKind.LOCAL_FILE:
            return load_local_file(spec.name)

        if self.session is None:
            raise ValidationError("No session was supplied.")

        fetcher = self.fetchers[spec.kind]
        return await fetcher.fetch(
            self.session,
            spec.name,
            FetchOptions(
                binary=spec.binary,
                encoding=spec.encoding,
                record=spec.record,
                volume=spec.volume,
                response_timeout=options.response_timeout,
            ),
        )
