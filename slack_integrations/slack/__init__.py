from .client import create_web_client, slack_error_code
from .resolver import SlackNameResolver
from .installation_store import TableInstallationStore
from .oauth import SlackOAuthHandler

__all__ = ["create_web_client", "slack_error_code", "SlackNameResolver", "TableInstallationStore", "SlackOAuthHandler"]
