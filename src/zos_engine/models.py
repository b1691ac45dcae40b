"""
Core data models for the z/OSMF client.

All models are plain data structures shared by the SDK operations and the CLI.
"""

from dataclasses import dataclass, field
from enum import Enum

from .errors import ValidationError

DEFAULT_SEQUENCE_NUMBER_WIDTH = 8


class DisplayMode(str, Enum):
    """How a comparison result is presented."""

    TERMINAL = "terminal"
    BROWSER = "browser"


class SourceKind(str, Enum):
    """Where the content of one side of a comparison comes from."""

    LOCAL_FILE = "local-file"
    USS_FILE = "uss-file"
    DATA_SET = "data-set"
    SPOOL_DD = "spool-dd"


@dataclass
class Session:
    """
    Authenticated connection details for a z/OSMF or APIML host.

    Passed explicitly to every operation; nothing here is global.
    """

    hostname: str | None = None
    port: int = 443
    protocol: str = "https"
    user: str | None = None
    password: str | None = None
    token_type: str | None = None
    token_value: str | None = None
    base_path: str = ""
    reject_unauthorized: bool = True

    def validate(self) -> None:
        """Ensure the minimum fields needed to reach a host are populated."""
        if not self.hostname:
            raise ValidationError("Required parameter 'hostname' must be defined")

    @property
    def base_url(self) -> str:
        """Scheme, host, port and optional base path, without a trailing slash."""
        base_path = self.base_path.strip("/")
        url = f"{self.protocol}://{self.hostname}:{self.port}"
        return f"{url}/{base_path}" if base_path else url

    @property
    def uses_token(self) -> bool:
        """Check if the session authenticates with a token cookie."""
        return bool(self.token_type and self.token_value)


@dataclass(frozen=True)
class SourceSpec:
    """
    One side of a comparison.

    Frozen to ensure immutability once created.
    """

    kind: SourceKind
    name: str
    binary: bool = False
    encoding: str | None = None
    record: bool = False
    volume: str | None = None

    def __post_init__(self):
        """Validate the source name."""
        if not self.name or not isinstance(self.name, str):
            raise ValidationError(f"A {self.kind.value} name must be a non-empty string")

    @property
    def label(self) -> str:
        """Human readable label used in diff headers."""
        if self.kind == SourceKind.DATA_SET and self.volume:
            return f"{self.volume}:{self.name}"
        return self.name


@dataclass
class ComparisonInput:
    """Raw content of both sides plus the normalization settings."""

    source_content: bytes
    target_content: bytes
    strip_sequence_numbers: bool = False
    sequence_number_width: int = DEFAULT_SEQUENCE_NUMBER_WIDTH


@dataclass
class CompareOptions:
    """Options controlling normalization and presentation of a comparison."""

    strip_sequence_numbers: bool = False
    sequence_number_width: int = DEFAULT_SEQUENCE_NUMBER_WIDTH
    context_lines: int = 3
    display_mode: DisplayMode = DisplayMode.TERMINAL
    response_timeout: int | None = None
    colorize: bool = False


@dataclass
class ComparisonResult:
    """
    Outcome of a comparison.

    In browser mode rendered_diff holds a confirmation message rather than a diff.
    """

    success: bool
    rendered_diff: str
    display_mode: DisplayMode
    source_label: str = ""
    target_label: str = ""

    @property
    def has_differences(self) -> bool:
        """Check if the terminal diff contains any change."""
        return self.display_mode == DisplayMode.TERMINAL and bool(self.rendered_diff)

    def to_dict(self) -> dict:
        """Convert the result to a dictionary for JSON output."""
        return {
            "success": self.success,
            "displayMode": self.display_mode.value,
            "source": self.source_label,
            "target": self.target_label,
            "commandResponse": self.rendered_diff,
        }


@dataclass
class ArchivedWorkflow:
    """Response of a workflow archive request."""

    workflow_key: str

    @classmethod
    def from_response(cls, payload: dict) -> "ArchivedWorkflow":
        """Build from the JSON body returned by z/OSMF."""
        return cls(workflow_key=payload.get("workflowKey", ""))

    def to_dict(self) -> dict:
        return {"workflowKey": self.workflow_key}


@dataclass
class RestResponse:
    """Status, headers and body of a completed REST call."""

    status_code: int
    content: bytes
    headers: dict[str, str] = field(default_factory=dict)

    @property
    def text(self) -> str:
        return self.content.decode("utf-8", errors="replace")

    @property
    def success(self) -> bool:
        """Check if the call returned a 2xx status."""
        return 200 <= self.status_code < 300
