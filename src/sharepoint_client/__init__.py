"""Async client for SharePoint document libraries over Microsoft Graph."""

from sharepoint_client.config import ClientConfig, load_config
from sharepoint_client.graph.client import (
    GraphApiError,
    GraphAuthError,
    SharepointClient,
    sharepoint_client_from_config,
)
from sharepoint_client.graph.models import Drive, Identity, Item, Site, Token

__version__ = "0.1.0"

__all__ = [
    "ClientConfig",
    "Drive",
    "GraphApiError",
    "GraphAuthError",
    "Identity",
    "Item",
    "SharepointClient",
    "Site",
    "Token",
    "__version__",
    "load_config",
    "sharepoint_client_from_config",
]
