"""
Slack Web API client construction
"""
from typing import Callable, Optional
from slack_sdk.web.async_client import AsyncWebClient
from slack_sdk.errors import SlackApiError

WebClientFactory = Callable[..., AsyncWebClient]


def create_web_client(token: Optional[str] = None) -> AsyncWebClient:
    """Create an async Web API client, optionally bound to a token"""
    return AsyncWebClient(token=token)


def slack_error_code(error: Exception) -> str:
    """Slack error code (e.g. ``not_in_channel``) or the exception text"""
    if isinstance(error, SlackApiError) and error.response is not None:
        code = error.response.get("error")
        if code:
            return code
    return str(error)
