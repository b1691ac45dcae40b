"""
Fetcher implementations for retrieving content to compare.

Provides a local file loader and remote fetchers for USS files, data sets and
job spool files.
"""

import logging
import os
import stat
from abc import ABC, abstractmethod
from dataclasses import dataclass
from pathlib import Path
from urllib.parse import quote

import httpx

from .errors import NotAFileError, PathNotFoundError, ValidationError
from .models import Session
from .rest_client import ZosmfRestClient

logger = logging.getLogger(__name__)

RESTFILES_FS = "/zosmf/restfiles/fs"
RESTFILES_DS = "/zosmf/restfiles/ds"
RESTJOBS_JOBS = "/zosmf/restjobs/jobs"

X_IBM_DATA_TYPE = "X-IBM-Data-Type"
X_IBM_RESPONSE_TIMEOUT = "X-IBM-Response-Timeout"


def load_local_file(path: str | Path) -> bytes:
    """
    Read a local file as raw bytes.

    Relative paths are resolved against the current directory first.

    Args:
        path: Path of the local file

    Returns:
        Full content of the file

    Raises:
        NotAFileError: If the path exists but is not a regular file
        PathNotFoundError: If the path cannot be opened
    """
    local_path = Path(path)
    if not local_path.is_absolute():
        local_path = local_path.resolve()

    try:
        handle = open(local_path, "rb")
    except IsADirectoryError:
        raise NotAFileError("Path given is not of a file, do recheck your path again")
    except OSError:
        raise PathNotFoundError("Path not found. Please check the path and try again")

    with handle:
        try:
            mode = os.fstat(handle.fileno()).st_mode
        except OSError:
            raise PathNotFoundError("Path not found. Please check the path and try again")
        if not stat.S_ISREG(mode):
            raise NotAFileError("Path given is not of a file, do recheck your path again")
        content = handle.read()

    logger.debug("Read %d bytes from %s", len(content), local_path)
    return content


@dataclass
class FetchOptions:
    """Transfer options for a remote fetch."""

    binary: bool = False
    encoding: str | None = None
    record: bool = False
    volume: str | None = None
    response_timeout: int | None = None

    def to_headers(self) -> dict[str, str]:
        """Map the options to z/OSMF request headers."""
        headers: dict[str, str] = {}
        if self.binary:
            headers[X_IBM_DATA_TYPE] = "binary"
        elif self.record:
            headers[X_IBM_DATA_TYPE] = "record"
        elif self.encoding:
            headers[X_IBM_DATA_TYPE] = f"text;fileEncoding={self.encoding}"
        if self.response_timeout is not None:
            headers[X_IBM_RESPONSE_TIMEOUT] = str(self.response_timeout)
        return headers


class RemoteFetcher(ABC):
    """
    Abstract base class for remote fetchers.

    Defines the interface for retrieving the content of a z/OS resource.
    Implementations never retry; a failed call raises TransportError.
    """

    def __init__(self, transport: httpx.AsyncBaseTransport | None = None):
        """
        Initialize the fetcher.

        Args:
            transport: Optional httpx transport handed to the REST client
        """
        self.transport = transport

    @abstractmethod
    def resource_for(self, name: str, options: FetchOptions) -> str:
        """Build the REST resource path for a named remote object."""
        pass

    async def fetch(
        self, session: Session, name: str, options: FetchOptions | None = None
    ) -> bytes:
        """
        Fetch remote content.

        Args:
            session: Authenticated session
            name: Name of the remote object
            options: Transfer options

        Returns:
            Raw content of the remote object
        """
        options = options or FetchOptions()
        if session is None:
            raise ValidationError("No session was supplied.")
        session.validate()
        if not name:
            raise ValidationError("A remote name must be supplied.")

        resource = self.resource_for(name, options)
        # Allow the HTTP layer to wait slightly longer than the server
        timeout = (
            float(options.response_timeout) + 5.0
            if options.response_timeout is not None
            else None
        )
        client = ZosmfRestClient(session, transport=self.transport)
        content = await client.get_expect_buffer(
            resource, headers=options.to_headers(), timeout=timeout
        )
        logger.debug("Fetched %d bytes from %s", len(content), resource)
        return content


class UssFileFetcher(RemoteFetcher):
    """Fetches the content of a USS file."""

    def resource_for(self, name: str, options: FetchOptions) -> str:
        path = name if name.startswith("/") else f"/{name}"
        return f"{RESTFILES_FS}{quote(path)}"


class DataSetFetcher(RemoteFetcher):
    """Fetches the content of a sequential data set or a PDS member."""

    def resource_for(self, name: str, options: FetchOptions) -> str:
        dsname = quote(name.strip().upper(), safe="().$@-")
        if options.volume:
            return f"{RESTFILES_DS}/-({quote(options.volume.upper())})/{dsname}"
        return f"{RESTFILES_DS}/{dsname}"


class SpoolFetcher(RemoteFetcher):
    """
    Fetches the content of a job spool file.

    The name has the form JOBNAME:JOBID:SPOOLID.
    """

    def resource_for(self, name: str, options: FetchOptions) -> str:
        parts = name.split(":")
        if len(parts) != 3 or not all(part.strip() for part in parts):
            raise ValidationError(
                f"Spool description must have the form JOBNAME:JOBID:SPOOLID: {name}"
            )
        job_name, job_id, spool_id = (part.strip() for part in parts)
        if not spool_id.isdigit():
            raise ValidationError(f"Spool file id must be numeric: {spool_id}")
        return f"{RESTJOBS_JOBS}/{quote(job_name)}/{quote(job_id)}/files/{spool_id}/records"
