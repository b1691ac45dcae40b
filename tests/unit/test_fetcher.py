"""
Unit tests for the local file loader and the remote fetchers.
"""

import os

import pytest

from zos_engine.errors import NotAFileError, PathNotFoundError, TransportError, ValidationError
from zos_engine.fetcher import (
    DataSetFetcher,
    FetchOptions,
    SpoolFetcher,
    UssFileFetcher,
    load_local_file,
)


class TestLoadLocalFile:
    """Tests for load_local_file."""

    def test_reads_bytes(self, tmp_path):
        path = tmp_path / "member.txt"
        path.write_bytes(b"LINE 1\nLINE 2\n")

        assert load_local_file(path) == b"LINE 1\nLINE 2\n"

    def test_resolves_relative_path(self, tmp_path, monkeypatch):
        """Test that relative paths are resolved against the working directory."""
        (tmp_path / "relative.txt").write_bytes(b"content")
        monkeypatch.chdir(tmp_path)

        assert load_local_file("relative.txt") == b"content"

    def test_missing_path(self, tmp_path):
        with pytest.raises(PathNotFoundError, match="Path not found"):
            load_local_file(tmp_path / "missing.txt")

    def test_directory_is_not_a_file(self, tmp_path):
        with pytest.raises(NotAFileError, match="not of a file"):
            load_local_file(tmp_path)

    @pytest.mark.skipif(not hasattr(os, "mkfifo"), reason="needs named pipes")
    def test_fifo_is_not_a_file(self, tmp_path):
        """Test that special files are rejected after they are opened."""
        fifo = tmp_path / "pipe"
        os.mkfifo(fifo)
        # Keep a writer open so opening the reader does not block
        writer = os.open(fifo, os.O_RDWR | os.O_NONBLOCK)
        try:
            with pytest.raises(NotAFileError):
                load_local_file(fifo)
        finally:
            os.close(writer)


class TestFetchOptions:
    """Tests for FetchOptions header mapping."""

    def test_no_headers_by_default(self):
        assert FetchOptions().to_headers() == {}

    def test_binary(self):
        assert FetchOptions(binary=True).to_headers() == {"X-IBM-Data-Type": "binary"}

    def test_record(self):
        assert FetchOptions(record=True).to_headers() == {"X-IBM-Data-Type": "record"}

    def test_encoding(self):
        headers = FetchOptions(encoding="IBM-1047").to_headers()
        assert headers == {"X-IBM-Data-Type": "text;fileEncoding=IBM-1047"}

    def test_binary_wins_over_encoding(self):
        headers = FetchOptions(binary=True, encoding="IBM-1047").to_headers()
        assert headers["X-IBM-Data-Type"] == "binary"

    def test_response_timeout(self):
        headers = FetchOptions(response_timeout=10).to_headers()
        assert headers == {"X-IBM-Response-Timeout": "10"}


class TestResources:
    """Tests for REST resource construction."""

    def test_uss_resource(self):
        resource = UssFileFetcher().resource_for("/u/ibmuser/a.txt", FetchOptions())
        assert resource == "/zosmf/restfiles/fs/u/ibmuser/a.txt"

    def test_uss_resource_adds_leading_slash(self):
        resource = UssFileFetcher().resource_for("u/ibmuser/a.txt", FetchOptions())
        assert resource == "/zosmf/restfiles/fs/u/ibmuser/a.txt"

    def test_data_set_resource(self):
        resource = DataSetFetcher().resource_for("ibmuser.cntl(iefbr14)", FetchOptions())
        assert resource == "/zosmf/restfiles/ds/IBMUSER.CNTL(IEFBR14)"

    def test_data_set_resource_with_volume(self):
        resource = DataSetFetcher().resource_for("IBMUSER.DATA", FetchOptions(volume="vol001"))
        assert resource == "/zosmf/restfiles/ds/-(VOL001)/IBMUSER.DATA"

    def test_spool_resource(self):
        resource = SpoolFetcher().resource_for("IEFBR14:JOB01234:2", FetchOptions())
        assert resource == "/zosmf/restjobs/jobs/IEFBR14/JOB01234/files/2/records"

    @pytest.mark.parametrize("name", ["IEFBR14:JOB01234", "IEFBR14::2", "A:B:C:D"])
    def test_spool_resource_rejects_bad_names(self, name):
        with pytest.raises(ValidationError, match="JOBNAME:JOBID:SPOOLID"):
            SpoolFetcher().resource_for(name, FetchOptions())

    def test_spool_resource_rejects_non_numeric_id(self):
        with pytest.raises(ValidationError, match="numeric"):
            SpoolFetcher().resource_for("IEFBR14:JOB01234:JESMSGLG", FetchOptions())


class TestRemoteFetch:
    """Tests for fetching through a mocked transport."""

    @pytest.mark.asyncio
    async def test_fetch_uss_file(self, session, recorder):
        transport = recorder(200, content=b"remote content\n")
        fetcher = UssFileFetcher(transport=transport)

        content = await fetcher.fetch(
            session, "/u/ibmuser/a.txt", FetchOptions(encoding="IBM-1047", response_timeout=5)
        )

        assert content == b"remote content\n"
        request = transport.requests[0]
        assert request.method == "GET"
        assert request.url.path == "/zosmf/restfiles/fs/u/ibmuser/a.txt"
        assert request.headers["X-CSRF-ZOSMF-HEADER"] == "true"
        assert request.headers["X-IBM-Data-Type"] == "text;fileEncoding=IBM-1047"
        assert request.headers["X-IBM-Response-Timeout"] == "5"
        assert request.headers["Authorization"].startswith("Basic ")

    @pytest.mark.asyncio
    async def test_fetch_with_token_sends_cookie(self, token_session, recorder):
        transport = recorder(200, content=b"data")
        fetcher = DataSetFetcher(transport=transport)

        await fetcher.fetch(token_session, "IBMUSER.DATA")

        cookie = transport.requests[0].headers["Cookie"]
        assert cookie == "apimlAuthenticationToken=eyJhbGciOiJSUzI1NiJ9.token"

    @pytest.mark.asyncio
    async def test_fetch_not_found_raises_transport_error(self, session, recorder):
        transport = recorder(404, json={"category": 1, "rc": 4, "message": "not found"})
        fetcher = UssFileFetcher(transport=transport)

        with pytest.raises(TransportError) as exc_info:
            await fetcher.fetch(session, "/u/ibmuser/missing.txt")

        assert exc_info.value.status_code == 404
        assert "not found" in exc_info.value.body
        assert exc_info.value.resource == "/zosmf/restfiles/fs/u/ibmuser/missing.txt"

    @pytest.mark.asyncio
    async def test_fetch_requires_session(self, recorder):
        transport = recorder(200)
        with pytest.raises(ValidationError, match="No session was supplied"):
            await UssFileFetcher(transport=transport).fetch(None, "/u/a.txt")
        assert transport.requests == []

    @pytest.mark.asyncio
    async def test_fetch_requires_name(self, session, recorder):
        transport = recorder(200)
        with pytest.raises(ValidationError):
            await UssFileFetcher(transport=transport).fetch(session, "")
        assert transport.requests == []
