"""
Configuration for Director Relay.
"""

import os
from dataclasses import dataclass
from typing import Optional


@dataclass
class RelayConfig:
    """Director Relay configuration settings."""

    # Server settings
    host: str = "0.0.0.0"
    port: int = 3000
    static_dir: str = "public"

    # TLS termination (both must be set)
    ssl_certfile: Optional[str] = None
    ssl_keyfile: Optional[str] = None

    # Basic auth gate (disabled when password is empty)
    auth_username: str = "admin"
    auth_password: str = ""

    # Cloud endpoints
    auth_url: str = "https://apis.control4.com/authentication/v1/rest"
    controller_auth_url: str = "https://apis.control4.com/authentication/v1/rest/authorization"
    accounts_url: str = "https://apis.control4.com/account/v3/rest/accounts"
    application_key: str = "78f6791373d61bea49fdb9fb8897f1f3af193f11"

    # Device identity sent with login
    device_name: str = "WebControl4"
    device_uuid: str = "0000000000000001"
    device_make: str = "WebControl4"
    device_model: str = "WebControl4"
    device_os: str = "Android"
    device_os_version: str = "10"

    # Outbound requests
    request_timeout: float = 30.0  # Seconds, applies to connect/read/write
    max_redirects: int = 5

    # SDDP discovery
    sddp_address: str = "239.255.255.250"
    sddp_port: int = 1902
    discovery_window: float = 4.0  # Seconds from bind until the socket closes

    # Logging
    log_level: str = "INFO"
    log_file: str = ""

    @property
    def tls_enabled(self) -> bool:
        return bool(self.ssl_certfile and self.ssl_keyfile)

    @property
    def auth_enabled(self) -> bool:
        return bool(self.auth_password)

    def device_info(self) -> dict:
        """Device identity block for the login payload."""
        return {
            "deviceName": self.device_name,
            "deviceUUID": self.device_uuid,
            "make": self.device_make,
            "model": self.device_model,
            "os": self.device_os,
            "osVersion": self.device_os_version,
        }

    @classmethod
    def from_env(cls) -> "RelayConfig":
        """Load configuration from environment variables."""
        defaults = cls()
        return cls(
            host=os.getenv("RELAY_HOST", defaults.host),
            port=int(os.getenv("RELAY_PORT", os.getenv("PORT", str(defaults.port)))),
            static_dir=os.getenv("RELAY_STATIC_DIR", defaults.static_dir),
            ssl_certfile=os.getenv("RELAY_SSL_CERTFILE") or None,
            ssl_keyfile=os.getenv("RELAY_SSL_KEYFILE") or None,
            auth_username=os.getenv("RELAY_AUTH_USERNAME", defaults.auth_username),
            auth_password=os.getenv("RELAY_AUTH_PASSWORD", defaults.auth_password),
            auth_url=os.getenv("RELAY_AUTH_URL", defaults.auth_url),
            controller_auth_url=os.getenv("RELAY_CONTROLLER_AUTH_URL", defaults.controller_auth_url),
            accounts_url=os.getenv("RELAY_ACCOUNTS_URL", defaults.accounts_url),
            application_key=os.getenv("RELAY_APPLICATION_KEY", defaults.application_key),
            request_timeout=float(os.getenv("RELAY_REQUEST_TIMEOUT", str(defaults.request_timeout))),
            max_redirects=int(os.getenv("RELAY_MAX_REDIRECTS", str(defaults.max_redirects))),
            sddp_address=os.getenv("RELAY_SDDP_ADDRESS", defaults.sddp_address),
            sddp_port=int(os.getenv("RELAY_SDDP_PORT", str(defaults.sddp_port))),
            discovery_window=float(os.getenv("RELAY_DISCOVERY_WINDOW", str(defaults.discovery_window))),
            log_level=os.getenv("RELAY_LOG_LEVEL", defaults.log_level),
            log_file=os.getenv("RELAY_LOG_FILE", defaults.log_file),
        )


# Global config instance
_config: Optional[RelayConfig] = None


def get_config() -> RelayConfig:
    """Get the global configuration instance."""
    global _config
    if _config is None:
        _config = RelayConfig.from_env()
    return _config


def set_config(config: RelayConfig) -> None:
    """Set the global configuration instance."""
    global _config
    _config = config
