"""
Process-wide service instances, injected into routes with Depends
"""
from typing import Any, Dict, Optional

from fastapi import Depends, Request

from slack_integrations.core.config import settings
from slack_integrations.services.integration_service import IntegrationService
from slack_integrations.slack.oauth import SlackOAuthHandler
from slack_integrations.store.factory import get_table
from slack_integrations.store.token_store import TokenStore

_token_store: Optional[TokenStore] = None
_integration_service: Optional[IntegrationService] = None
_oauth_handler: Optional[SlackOAuthHandler] = None

INVALID_JSON_BODY = "Request body must be valid JSON"


def get_token_store() -> TokenStore:
    global _token_store
    if _token_store is None:
        _token_store = TokenStore(get_table())
    return _token_store


def get_integration_service(token_store: TokenStore = Depends(get_token_store)) -> IntegrationService:
    global _integration_service
    if _integration_service is None:
        _integration_service = IntegrationService(token_store)
    return _integration_service


def get_oauth_handler(token_store: TokenStore = Depends(get_token_store)) -> SlackOAuthHandler:
    global _oauth_handler
    if _oauth_handler is None:
        _oauth_handler = SlackOAuthHandler(settings, token_store)
    return _oauth_handler


def reset_services():
    """Forget cached instances (used on shutdown)"""
    global _token_store, _integration_service, _oauth_handler
    _token_store = None
    _integration_service = None
    _oauth_handler = None


async def read_json_body(request: Request) -> Dict[str, Any]:
    """Request body as a dict; an empty body reads as ``{}``"""
    body = await request.body()
    if not body:
        return {}
    try:
        data = await request.json()
    except ValueError:
        raise ValueError(INVALID_JSON_BODY)
    if not isinstance(data, dict):
        raise ValueError("Request body must be a JSON object")
    return data
