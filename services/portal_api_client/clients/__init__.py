"""Portal API Client clients module.

Contains the backend request gateway and the data services built on it.
"""

from services.portal_api_client.clients.api_client import (
    ApiClient,
    MultipartForm,
    RequestOptions,
    ResponseEnvelope,
)
from services.portal_api_client.clients.dashboard_client import DashboardServiceImpl
from services.portal_api_client.clients.user_client import UserServiceImpl

__all__ = [
    "ApiClient",
    "DashboardServiceImpl",
    "MultipartForm",
    "RequestOptions",
    "ResponseEnvelope",
    "UserServiceImpl",
]
