"""Unit tests for config.py: ClientConfig and load_config()."""

import dataclasses
import os
from unittest.mock import patch

import pytest

from sharepoint_client.config import ClientConfig, load_config

# ---------------------------------------------------------------------------
# Helpers
# ---------------------------------------------------------------------------

_REQUIRED_ENV = {
    "SP_TENANT_ID": "test-tenant-id",
    "SP_TENANT_NAME": "contoso",
    "SP_SITE_NAME": "Finance",
    "SP_CLIENT_ID": "test-client-id",
    "SP_CLIENT_SECRET": "test-secret",
}


def _make_config() -> ClientConfig:
    return ClientConfig(
        tenant_id="tid",
        tenant_name="contoso",
        site_name="Finance",
        client_id="cid",
        client_secret="s3cr3t-value",
    )


# ---------------------------------------------------------------------------
# ClientConfig tests
# ---------------------------------------------------------------------------


class TestClientConfig:
    def test_is_immutable(self) -> None:
        config = _make_config()
        with pytest.raises(dataclasses.FrozenInstanceError):
            config.site_name = "Other"  # type: ignore[misc]

    def test_repr_hides_client_secret(self) -> None:
        assert "s3cr3t-value" not in repr(_make_config())

    def test_equality(self) -> None:
        assert _make_config() == _make_config()


# ---------------------------------------------------------------------------
# load_config tests
# ---------------------------------------------------------------------------


class TestLoadConfig:
    def test_reads_all_fields_from_env(self) -> None:
        with patch.dict(os.environ, _REQUIRED_ENV, clear=False):
            config = load_config()
        assert config.tenant_id == "test-tenant-id"
        assert config.tenant_name == "contoso"
        assert config.site_name == "Finance"
        assert config.client_id == "test-client-id"
        assert config.client_secret == "test-secret"

    @pytest.mark.parametrize("missing", sorted(_REQUIRED_ENV))
    def test_raises_key_error_when_variable_missing(self, missing: str) -> None:
        env = {k: v for k, v in _REQUIRED_ENV.items() if k != missing}
        with patch.dict(os.environ, env, clear=True), pytest.raises(KeyError):
            load_config()
