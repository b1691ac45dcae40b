"""
Unit tests for workflow archive and delete operations.
"""

import json

import pytest

from zos_engine.errors import TransportError, ValidationError
from zos_engine.models import ArchivedWorkflow, Session
from zos_engine.workflows import (
    archive_workflow,
    delete_archived_workflow,
    delete_workflow,
    workflow_resource,
)

WORKFLOW_KEY = "0123-456789-abc-def"


class TestArchiveWorkflow:
    """Tests for archive_workflow."""

    @pytest.mark.asyncio
    async def test_successful_archive(self, session, recorder):
        transport = recorder(200, json={"workflowKey": WORKFLOW_KEY})

        response = await archive_workflow(session, WORKFLOW_KEY, "1.0", transport=transport)

        assert response == ArchivedWorkflow(workflow_key=WORKFLOW_KEY)
        request = transport.requests[0]
        assert request.method == "POST"
        assert request.url.path == f"/zosmf/workflow/rest/1.0/workflows/{WORKFLOW_KEY}/operations/archive"
        assert request.headers["Content-Type"] == "application/json"

    @pytest.mark.asyncio
    async def test_missing_version_defaults_to_1_0(self, session, recorder):
        transport = recorder(200, json={"workflowKey": WORKFLOW_KEY})

        await archive_workflow(session, WORKFLOW_KEY, transport=transport)

        assert len(transport.requests) == 1
        expected = f"/zosmf/workflow/rest/1.0/workflows/{WORKFLOW_KEY}/operations/archive"
        assert transport.requests[0].url.path == expected

    @pytest.mark.asyncio
    async def test_404_not_found(self, session, recorder):
        body = {"error": "IZUWF5001W: The workflow key was not found."}
        transport = recorder(404, json=body)

        with pytest.raises(TransportError) as exc_info:
            await archive_workflow(session, WORKFLOW_KEY, transport=transport)

        assert exc_info.value.status_code == 404
        assert json.loads(exc_info.value.body) == body

    @pytest.mark.asyncio
    async def test_409_request_conflict(self, session, recorder):
        transport = recorder(409, content=b"Request Conflict")

        with pytest.raises(TransportError) as exc_info:
            await archive_workflow(session, WORKFLOW_KEY, transport=transport)

        assert exc_info.value.details["errorCode"] == 409
        assert exc_info.value.details["causeErrors"] == "Request Conflict"

    @pytest.mark.asyncio
    async def test_invalid_json_response(self, session, recorder):
        transport = recorder(200, content=b"not json")

        with pytest.raises(TransportError, match="Unable to parse JSON"):
            await archive_workflow(session, WORKFLOW_KEY, transport=transport)


class TestMissingSession:
    """Tests for archive without a usable session."""

    @pytest.mark.asyncio
    async def test_none_session(self, recorder):
        transport = recorder(200)
        with pytest.raises(ValidationError) as exc_info:
            await archive_workflow(None, WORKFLOW_KEY, "1.0", transport=transport)

        assert exc_info.value.details == {"msg": "No session was supplied."}
        assert transport.requests == []

    @pytest.mark.asyncio
    async def test_empty_session(self, recorder):
        transport = recorder(200)
        with pytest.raises(ValidationError) as exc_info:
            await archive_workflow(Session(), WORKFLOW_KEY, "1.0", transport=transport)

        assert exc_info.value.details == {"msg": "Required parameter 'hostname' must be defined"}
        assert transport.requests == []


class TestMissingWorkflowKey:
    """Tests for archive and delete without a workflow key."""

    @pytest.mark.asyncio
    @pytest.mark.parametrize("workflow_key", [None, ""])
    async def test_missing_key(self, session, recorder, workflow_key):
        transport = recorder(200)
        with pytest.raises(ValidationError) as exc_info:
            await archive_workflow(session, workflow_key, "1.0", transport=transport)

        assert exc_info.value.details == {"msg": "No workflow key parameter was supplied."}
        assert transport.requests == []

    @pytest.mark.asyncio
    @pytest.mark.parametrize("workflow_key", [None, ""])
    async def test_missing_key_wins_over_missing_session(self, workflow_key):
        """Test that the key error is reported whatever the session."""
        for session in (None, Session()):
            with pytest.raises(ValidationError, match="No workflow key parameter was supplied."):
                await archive_workflow(session, workflow_key)

    @pytest.mark.asyncio
    @pytest.mark.parametrize("operation", [delete_workflow, delete_archived_workflow])
    async def test_delete_missing_key(self, session, operation):
        with pytest.raises(ValidationError, match="No workflow key parameter was supplied."):
            await operation(session, "")


class TestDeleteWorkflow:
    """Tests for delete_workflow and delete_archived_workflow."""

    @pytest.mark.asyncio
    async def test_delete_workflow(self, session, recorder):
        transport = recorder(204)

        result = await delete_workflow(session, WORKFLOW_KEY, transport=transport)

        assert result is None
        request = transport.requests[0]
        assert request.method == "DELETE"
        assert request.url.path == f"/zosmf/workflow/rest/1.0/workflows/{WORKFLOW_KEY}"

    @pytest.mark.asyncio
    async def test_delete_archived_workflow(self, session, recorder):
        transport = recorder(204)

        await delete_archived_workflow(session, WORKFLOW_KEY, transport=transport)

        assert transport.requests[0].url.path == (
            f"/zosmf/workflow/rest/1.0/archivedworkflows/{WORKFLOW_KEY}"
        )

    @pytest.mark.asyncio
    async def test_delete_unexpected_status(self, session, recorder):
        with pytest.raises(TransportError) as exc_info:
            await delete_workflow(session, WORKFLOW_KEY, transport=recorder(404))
        assert exc_info.value.status_code == 404


def test_workflow_resource_quotes_key():
    assert workflow_resource("a/b") == "/zosmf/workflow/rest/1.0/workflows/a%2Fb"
