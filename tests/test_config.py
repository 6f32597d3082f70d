"""Tests for ClientConfig."""

import dataclasses
import os
from unittest.mock import patch

import pytest

from mcp_synology_srm.config import ClientConfig
from mcp_synology_srm.errors import InvalidArgumentError


class TestClientConfig:
    """Tests for ClientConfig dataclass."""

    def test_defaults(self) -> None:
        """Test default connection settings."""
        config = ClientConfig(hostname="10.0.0.1", username="admin", password="secret")
        assert config.port == 8001
        assert config.protocol == "https"
        assert config.is_https is True
        assert config.keep_session_alive is False
        assert config.session_id is None
        assert config.verify_ssl is False
        assert config.timeout == 10.0

    def test_immutable(self) -> None:
        """Test configuration cannot be changed after creation."""
        config = ClientConfig(hostname="10.0.0.1", username="admin", password="secret")
        with pytest.raises(dataclasses.FrozenInstanceError):
            config.hostname = "10.0.0.2"  # type: ignore[misc]

    def test_invalid_protocol(self) -> None:
        """Test an unknown protocol is rejected."""
        with pytest.raises(InvalidArgumentError):
            ClientConfig(hostname="10.0.0.1", username="a", password="b", protocol="ftp")

    def test_from_env_defaults(self) -> None:
        """Test from_env with no environment variables."""
        with patch.dict(os.environ, {}, clear=True):
            config = ClientConfig.from_env()
            assert config.hostname == "192.168.1.1"
            assert config.username == "admin"
            assert config.password == ""
            assert config.port == 8001
            assert config.protocol == "https"
            assert config.session_id is None

    def test_from_env_with_values(self) -> None:
        """Test from_env with environment variables set."""
        env_vars = {
            "SRM_HOST": "10.0.0.1",
            "SRM_PORT": "8000",
            "SRM_USERNAME": "monitor",
            "SRM_PASSWORD": "testpass",
            "SRM_HTTPS": "false",
            "SRM_KEEP_SESSION": "yes",
            "SRM_SESSION_ID": "stored-sid",
            "SRM_VERIFY_SSL": "1",
            "SRM_TIMEOUT": "2.5",
        }
        with patch.dict(os.environ, env_vars, clear=True):
            config = ClientConfig.from_env()
            assert config.hostname == "10.0.0.1"
            assert config.port == 8000
            assert config.username == "monitor"
            assert config.password == "testpass"
            assert config.protocol == "http"
            assert config.keep_session_alive is True
            assert config.session_id == "stored-sid"
            assert config.verify_ssl is True
            assert config.timeout == 2.5
