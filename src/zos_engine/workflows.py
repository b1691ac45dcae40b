"""
z/OSMF workflow lifecycle operations: archive, delete and delete archived.
"""

import logging
from urllib.parse import quote

import httpx

from .errors import ValidationError
from .models import ArchivedWorkflow, Session
from .rest_client import HTTP_STATUS_204, ZosmfRestClient

logger = logging.getLogger(__name__)

RESOURCE = "/zosmf/workflow/rest"
ZOSMF_VERSION = "1.0"
WORKFLOW_RESOURCE = "workflows"
ARCHIVED_WORKFLOW_RESOURCE = "archivedworkflows"
ARCHIVE_WORKFLOW = "operations/archive"


def _validate(session: Session | None, workflow_key: str | None) -> None:
    """Check the session and workflow key before any request is sent."""
    if not workflow_key or not isinstance(workflow_key, str):
        raise ValidationError("No workflow key parameter was supplied.")
    if session is None:
        raise ValidationError("No session was supplied.")
    session.validate()


def workflow_resource(
    workflow_key: str,
    version: str | None = None,
    collection: str = WORKFLOW_RESOURCE,
) -> str:
    """Build the resource path of a workflow or archived workflow."""
    return f"{RESOURCE}/{version or ZOSMF_VERSION}/{collection}/{quote(workflow_key, safe='')}"


async def archive_workflow(
    session: Session | None,
    workflow_key: str | None,
    version: str | None = None,
    transport: httpx.AsyncBaseTransport | None = None,
) -> ArchivedWorkflow:
    """
    Archive a workflow instance.

    Args:
        session: z/OSMF session
        workflow_key: Key of the workflow to archive
        version: z/OSMF REST API version (default 1.0)
        transport: Optional httpx transport (used by tests)

    Returns:
        ArchivedWorkflow with the key echoed by z/OSMF
    """
    logger.debug("archive_workflow(%s)", workflow_key)
    _validate(session, workflow_key)

    resource = f"{workflow_resource(workflow_key, version)}/{ARCHIVE_WORKFLOW}"
    client = ZosmfRestClient(session, transport=transport)
    payload = await client.post_expect_json(resource)
    return ArchivedWorkflow.from_response(payload)


async def delete_workflow(
    session: Session | None,
    workflow_key: str | None,
    version: str | None = None,
    transport: httpx.AsyncBaseTransport | None = None,
) -> None:
    """Delete a workflow instance."""
    logger.debug("delete_workflow(%s)", workflow_key)
    _validate(session, workflow_key)

    client = ZosmfRestClient(session, transport=transport)
    await client.delete_expect_status(
        workflow_resource(workflow_key, version), expected=(HTTP_STATUS_204,)
    )


async def delete_archived_workflow(
    session: Session | None,
    workflow_key: str | None,
    version: str | None = None,
    transport: httpx.AsyncBaseTransport | None = None,
) -> None:
    """Delete an archived workflow."""
    logger.debug("delete_archived_workflow(%s)", workflow_key)
    _validate(session, workflow_key)

    client = ZosmfRestClient(session, transport=transport)
    await client.delete_expect_status(
        workflow_resource(workflow_key, version, ARCHIVED_WORKFLOW_RESOURCE),
        expected=(HTTP_STATUS_204,),
    )
