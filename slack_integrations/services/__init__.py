from .integration_service import IntegrationService

__all__ = ["IntegrationService"]
