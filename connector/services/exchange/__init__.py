"""
Data exchange clients.
"""

from connector.services.exchange.data_request_service import DataRequestService

__all__ = ["DataRequestService"]
