"""
Slack OAuth and events endpoints
"""
from typing import Optional

from fastapi import APIRouter, Depends, Request
from fastapi.responses import JSONResponse

from slack_integrations.api.deps import get_oauth_handler
from slack_integrations.core.logging_config import get_logger
from slack_integrations.models import ApiResponse
from slack_integrations.slack.oauth import OAUTH_ERROR_PREFIX, SlackOAuthHandler

router = APIRouter(prefix="/slack", tags=["slack"])
logger = get_logger("slack_integrations.api.slack")


def _envelope(result: ApiResponse) -> JSONResponse:
    return JSONResponse(status_code=200, content=result.to_json())


@router.get("/oauth/callback")
async def slack_oauth_callback(
    code: Optional[str] = None,
    oauth_handler: SlackOAuthHandler = Depends(get_oauth_handler),
):
    """Handle OAuth callback from Slack"""
    logger.info("Processing Slack OAuth callback")
    try:
        return _envelope(await oauth_handler.exchange_code_for_token(code))
    except Exception as e:
        logger.error(f"OAuth callback error: {e}")
        return _envelope(ApiResponse.fail(OAUTH_ERROR_PREFIX + str(e)))


@router.get("/oauth/url")
async def slack_oauth_url(oauth_handler: SlackOAuthHandler = Depends(get_oauth_handler)):
    """Get the Slack authorization URL"""
    try:
        return _envelope(oauth_handler.get_oauth_url())
    except Exception as e:
        logger.error(f"Error generating OAuth URL: {e}")
        return _envelope(ApiResponse.fail(str(e)))


@router.get("/oauth/workspaces")
async def slack_workspaces(oauth_handler: SlackOAuthHandler = Depends(get_oauth_handler)):
    """List authorized workspaces"""
    try:
        return _envelope(await oauth_handler.list_workspaces())
    except Exception as e:
        logger.error(f"Error fetching workspaces: {e}")
        return _envelope(ApiResponse.fail(str(e)))


@router.get("/oauth/channels")
async def slack_channels(
    workspaceId: Optional[str] = None,
    oauth_handler: SlackOAuthHandler = Depends(get_oauth_handler),
):
    """List channels of an authorized workspace"""
    try:
        return _envelope(await oauth_handler.list_channels(workspaceId))
    except Exception as e:
        logger.error(f"Error fetching channels for {workspaceId}: {e}")
        return _envelope(ApiResponse.fail(str(e)))


@router.post("/events")
async def slack_events(request: Request):
    """Handle Slack events - routes to the Bolt app"""
    handler = getattr(request.app.state, "slack_handler", None)
    if handler is None:
        return JSONResponse(status_code=404, content={"error": "Slack events are not configured"})
    return await handler.handle(request)
