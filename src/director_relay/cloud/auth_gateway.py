"""
Cloud auth gateway.

Three stateless calls on top of the request client. Each response is
checked against the expected shape before a field is read, so a missing
token becomes a named error instead of an empty value.
"""

import json
import logging
from typing import Any, Dict, Optional

from pydantic import ValidationError as SchemaError

from ..config import RelayConfig, get_config
from ..errors import AuthenticationError, RelayError, ServerError, ValidationError
from ..transport import RequestClient
from .schemas import AuthTokenEnvelope, DirectorToken

logger = logging.getLogger(__name__)


class CloudAuthGateway:
    """
    Talks to the cloud authentication and account endpoints.

    Usage:
        gateway = CloudAuthGateway(config, RequestClient())
        account_token = await gateway.login("user@example.com", "secret")
        director = await gateway.mint_director_token(account_token, "control4_core_000FFF")
    """

    def __init__(self, config: RelayConfig, client: RequestClient):
        self.config = config
        self.client = client

    def _login_payload(self, username: str, password: str) -> Dict[str, Any]:
        return {
            "clientInfo": {
                "device": self.config.device_info(),
                "userInfo": {
                    "applicationKey": self.config.application_key,
                    "password": password,
                    "userName": username,
                },
            },
        }

    async def login(self, username: str, password: str) -> str:
        """
        Exchange account credentials for an account bearer token.

        Raises:
            ValidationError: username or password empty
            AuthenticationError: request failed or response has no token
        """
        if not username or not password:
            raise ValidationError("username and password required")

        body = json.dumps(self._login_payload(username, password)).encode("utf-8")
        try:
            text = await self.client.fetch_text(
                self.config.auth_url,
                method="POST",
                headers={"Content-Type": "application/json"},
                body=body,
            )
            envelope = AuthTokenEnvelope.model_validate_json(text)
        except SchemaError as e:
            logger.warning("Login response did not contain an account token")
            raise AuthenticationError("No token in response") from e
        except RelayError as e:
            logger.warning(f"Login failed: {e.message}")
            raise AuthenticationError(e.message) from e

        logger.info("Account login succeeded")
        return envelope.auth_token.token

    async def list_controllers(self, account_token: str) -> Any:
        """
        Fetch account metadata including the controllers on the account.

        Returns the ``account`` object when present, otherwise the whole body.
        """
        if not account_token:
            raise ValidationError("accountToken required")

        try:
            text = await self.client.fetch_text(
                self.config.accounts_url,
                headers={"Authorization": f"Bearer {account_token}"},
            )
            data = json.loads(text)
        except json.JSONDecodeError as e:
            raise ServerError(f"Invalid accounts response: {e}") from e
        except RelayError as e:
            logger.warning(f"Listing controllers failed: {e.message}")
            raise ServerError(e.message) from e

        if isinstance(data, dict) and data.get("account"):
            return data["account"]
        return data

    async def mint_director_token(
        self, account_token: str, controller_common_name: str
    ) -> DirectorToken:
        """
        Request a director-scoped bearer token for one controller.

        Raises:
            ValidationError: either input missing
            ServerError: request failed or response has no token
        """
        if not account_token or not controller_common_name:
            raise ValidationError("accountToken and controllerCommonName required")

        body = json.dumps({
            "serviceInfo": {
                "commonName": controller_common_name,
                "services": "director",
            },
        }).encode("utf-8")
        try:
            text = await self.client.fetch_text(
                self.config.controller_auth_url,
                method="POST",
                headers={
                    "Content-Type": "application/json",
                    "Authorization": f"Bearer {account_token}",
                },
                body=body,
            )
            envelope = AuthTokenEnvelope.model_validate_json(text)
        except SchemaError as e:
            raise ServerError("No director token in response") from e
        except RelayError as e:
            logger.warning(f"Director token request for {controller_common_name} failed: {e.message}")
            raise ServerError(e.message) from e

        logger.info(f"Director token minted for {controller_common_name}")
        return DirectorToken(
            token=envelope.auth_token.token,
            valid_seconds=envelope.auth_token.valid_seconds,
        )


# Global gateway instance
_gateway: Optional[CloudAuthGateway] = None


def get_cloud_gateway() -> CloudAuthGateway:
    """Get the global cloud gateway instance."""
    global _gateway
    if _gateway is None:
        config = get_config()
        _gateway = CloudAuthGateway(
            config,
            RequestClient(timeout=config.request_timeout, max_redirects=config.max_redirects),
        )
    return _gateway
