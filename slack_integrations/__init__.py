"""
Slack notification integrations for projects: OAuth workspace authorization,
integration records and test-message delivery.
"""

__version__ = "0.1.0"
