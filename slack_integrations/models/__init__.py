from .integration import Integration, IntegrationSummary, integration_name
from .workspace import WorkspaceCredential
from .response import ApiResponse

__all__ = ["Integration", "IntegrationSummary", "integration_name", "WorkspaceCredential", "ApiResponse"]
