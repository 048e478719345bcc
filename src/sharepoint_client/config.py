"""Client configuration loaded from environment variables."""

import os
from dataclasses import dataclass, field


@dataclass(frozen=True)
class ClientConfig:
    """Tenant, site and app registration settings for a SharepointClient.

    All fields are required. The instance is immutable once built, so a
    single client can be shared between concurrent tasks.
    """

    tenant_id: str
    tenant_name: str
    site_name: str
    client_id: str
    client_secret: str = field(repr=False)


def load_config() -> ClientConfig:
    """Construct a ClientConfig from environment variables.

    Required environment variables:
        SP_TENANT_ID: Azure AD tenant ID.
        SP_TENANT_NAME: Tenant name, the "contoso" in contoso.sharepoint.com.
        SP_SITE_NAME: Name of the SharePoint site under /sites/.
        SP_CLIENT_ID: Azure AD application (client) ID.
        SP_CLIENT_SECRET: Azure AD application client secret.

    Returns:
        Configured ClientConfig instance.

    Raises:
        KeyError: If any required variable is missing.
    """
    return ClientConfig(
        tenant_id=os.environ["SP_TENANT_ID"],
        tenant_name=os.environ["SP_TENANT_NAME"],
        site_name=os.environ["SP_SITE_NAME"],
        client_id=os.environ["SP_CLIENT_ID"],
        client_secret=os.environ["SP_CLIENT_SECRET"],
    )
