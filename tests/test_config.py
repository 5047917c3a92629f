"""
Unit tests for client configuration
"""

import pytest

from pusher_rest.config import (
    ClientConfig,
    DEFAULT_HOST,
    load_credentials_from_env,
)
from pusher_rest.exceptions import InvalidArgument, InvalidCredentialFormat

SECRET = "0123456789abcdef" * 4


class TestClientConfig:
    """Test configuration defaults and validation"""

    def test_defaults(self):
        """Test basic configuration creation"""
        config = ClientConfig()
        assert config.host == DEFAULT_HOST == "api.pusherapp.com"
        assert config.scheme == "http"
        assert config.secure is False
        assert config.request_timeout_ms == 4000
        assert config.timeout_seconds == 4.0

    def test_config_validation(self):
        """Test configuration validation"""
        with pytest.raises(InvalidArgument, match="host cannot be empty"):
            ClientConfig(host="")

        with pytest.raises(InvalidArgument, match="must not contain a scheme or path"):
            ClientConfig(host="https://api.pusherapp.com")

        with pytest.raises(InvalidArgument, match="scheme must be"):
            ClientConfig(scheme="ftp")

        with pytest.raises(InvalidArgument, match="Request timeout must be positive"):
            ClientConfig(request_timeout_ms=0)

        with pytest.raises(InvalidArgument, match="Request timeout must be an integer"):
            ClientConfig(request_timeout_ms=1.5)

    def test_with_secure(self):
        """Secure toggles the scheme without touching the original"""
        config = ClientConfig()
        secure = config.with_secure(True)

        assert secure.scheme == "https"
        assert secure.secure is True
        assert config.scheme == "http"
        assert secure.with_secure(False).scheme == "http"

    def test_immutable(self):
        """Configuration cannot be changed in place"""
        config = ClientConfig()
        with pytest.raises(AttributeError):
            config.host = "example.com"

    def test_host_rejects_uri_delimiters(self):
        """Hosts cannot carry a query, fragment, userinfo or whitespace"""
        for host in ["api.pusherapp.com?x=1", "api.pusherapp.com#frag",
                     "user@api.pusherapp.com", "api pusherapp.com", "api.pusherapp.com\n"]:
            with pytest.raises(InvalidArgument, match="host must not contain"):
                ClientConfig(host=host)

    def test_host_with_port(self):
        """Hosts may carry a port"""
        assert ClientConfig(host="localhost:8080").host == "localhost:8080"


class TestEnvironmentLoading:
    """Test loading configuration from environment variables"""

    def test_from_env(self):
        """Variables override defaults"""
        config = ClientConfig.from_env({
            "PUSHER_HOST": "api-eu.pusher.com",
            "PUSHER_SCHEME": "HTTPS",
            "PUSHER_REQUEST_TIMEOUT_MS": "1500",
        })
        assert config.host == "api-eu.pusher.com"
        assert config.scheme == "https"
        assert config.request_timeout_ms == 1500

    def test_from_empty_env(self):
        """Unset variables fall back to defaults"""
        assert ClientConfig.from_env({}) == ClientConfig()

    def test_from_env_invalid_timeout(self):
        """Non-numeric timeouts are rejected"""
        with pytest.raises(InvalidArgument, match="PUSHER_REQUEST_TIMEOUT_MS"):
            ClientConfig.from_env({"PUSHER_REQUEST_TIMEOUT_MS": "soon"})

    def test_from_os_environ(self, monkeypatch):
        """os.environ is read by default"""
        monkeypatch.setenv("PUSHER_HOST", "localhost:4567")
        monkeypatch.delenv("PUSHER_SCHEME", raising=False)
        monkeypatch.delenv("PUSHER_REQUEST_TIMEOUT_MS", raising=False)
        assert ClientConfig.from_env().host == "localhost:4567"

    def test_load_credentials(self):
        """Credentials are read and validated"""
        credentials = load_credentials_from_env({
            "PUSHER_APP_ID": "3",
            "PUSHER_KEY": "278d425bdf160c739803",
            "PUSHER_SECRET": SECRET,
        })
        assert credentials.app_id == "3"
        assert credentials.secret == SECRET

    def test_load_credentials_missing(self):
        """Missing variables are reported by name"""
        with pytest.raises(InvalidArgument, match="PUSHER_KEY, PUSHER_SECRET"):
            load_credentials_from_env({"PUSHER_APP_ID": "3"})

    def test_load_credentials_bad_secret(self):
        """Malformed secrets are rejected"""
        with pytest.raises(InvalidCredentialFormat):
            load_credentials_from_env({
                "PUSHER_APP_ID": "3",
                "PUSHER_KEY": "k",
                "PUSHER_SECRET": "7ad3773142a6692b25b8",
            })
