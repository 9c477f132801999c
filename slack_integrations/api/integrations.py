"""
Integration API endpoints
"""
from fastapi import APIRouter, Depends, Request
from fastapi.responses import JSONResponse

from slack_integrations.api.deps import get_integration_service, read_json_body
from slack_integrations.core.errors import IntegrationValidationError
from slack_integrations.core.logging_config import get_logger
from slack_integrations.models import ApiResponse
from slack_integrations.services.integration_service import IntegrationService

router = APIRouter(prefix="/projects/{project_id}/integrations", tags=["integrations"])
logger = get_logger("slack_integrations.api.integrations")


def _envelope(result: ApiResponse, status_code: int = 200) -> JSONResponse:
    return JSONResponse(status_code=status_code, content=result.to_json())


def _failure(action: str, e: Exception) -> JSONResponse:
    logger.error(f"Error {action}: {e}")
    return _envelope(ApiResponse.fail(str(e)))


@router.post("")
async def list_integrations(
    project_id: str,
    service: IntegrationService = Depends(get_integration_service),
):
    """List the project's integrations with resolved Slack names"""
    try:
        return _envelope(await service.list_integrations(project_id))
    except Exception as e:
        return _failure("listing integrations", e)


@router.post("/add")
async def add_integration(
    project_id: str,
    request: Request,
    service: IntegrationService = Depends(get_integration_service),
):
    """Create an integration"""
    try:
        body = await read_json_body(request)
        result = await service.add_integration(
            project_id,
            slack_workspace_id=body.get("slackWorkspaceId"),
            slack_channel_id=body.get("slackChannelId"),
            notification_events=body.get("notificationEvents"),
            description=body.get("description"),
        )
        return _envelope(result)
    except IntegrationValidationError as e:
        logger.info(f"Rejected integration for project {project_id}: {e.message}")
        return _envelope(ApiResponse.fail(e.message), status_code=400)
    except Exception as e:
        return _failure("adding integration", e)


@router.post("/{integration_id}")
async def get_integration(
    project_id: str,
    integration_id: str,
    service: IntegrationService = Depends(get_integration_service),
):
    """Get a single integration"""
    try:
        return _envelope(await service.get_integration(project_id, integration_id))
    except Exception as e:
        return _failure("getting integration", e)


@router.post("/{integration_id}/edit")
async def edit_integration(
    project_id: str,
    integration_id: str,
    request: Request,
    service: IntegrationService = Depends(get_integration_service),
):
    """Update description and notification events"""
    try:
        body = await read_json_body(request)
        result = await service.edit_integration(
            project_id,
            integration_id,
            description=body.get("description"),
            notification_events=body.get("notificationEvents"),
        )
        return _envelope(result)
    except Exception as e:
        return _failure("editing integration", e)


@router.post("/{integration_id}/delete")
async def delete_integration(
    project_id: str,
    integration_id: str,
    service: IntegrationService = Depends(get_integration_service),
):
    """Delete an integration, removing the bot from its channel first"""
    try:
        return _envelope(await service.delete_integration(project_id, integration_id))
    except Exception as e:
        return _failure("deleting integration", e)


@router.post("/{integration_id}/test")
async def send_test_message(
    project_id: str,
    integration_id: str,
    service: IntegrationService = Depends(get_integration_service),
):
    """Post a test message to the integration's channel"""
    try:
        return _envelope(await service.send_test_message(project_id, integration_id))
    except Exception as e:
        return _failure("sending test message", e)
