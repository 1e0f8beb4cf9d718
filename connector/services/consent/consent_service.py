"""
Consent manager API client.

Thin httpx wrapper over the consent manager REST API. Every call is
authenticated with the participant token obtained from participants/login.
"""

import logging
from typing import Any, Dict, Optional

import httpx

from common.utils.exceptions import UpstreamServiceException
from common.utils.http import decode_body
from common.utils.urls import url_checker

logger = logging.getLogger(__name__)


class ConsentService:
    """
    Client for the external consent manager.

    Returns the decoded JSON body of each call. Non-2xx answers and
    transport failures raise UpstreamServiceException.
    """

    USER_KEY_HEADER = "x-user-key"

    def __init__(
        self,
        base_url: str,
        service_key: Optional[str],
        secret_key: Optional[str],
        timeout: float = 30.0,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ):
        """
        Initialize ConsentService.

        Args:
            base_url: Consent manager base URL (e.g. https://consent.example.com/v1)
            service_key: Participant client ID
            secret_key: Participant client secret
            timeout: Per-request timeout in seconds
            transport: Optional httpx transport (tests use httpx.MockTransport)
        """
        self._base_url = base_url
        self._service_key = service_key
        self._secret_key = secret_key
        self._timeout = timeout
        self._transport = transport
        self._participant_token: Optional[str] = None

    @property
    def participant_token(self) -> Optional[str]:
        return self._participant_token

    # ─────────────────────────────────────────────────────────────────
    # HTTP plumbing
    # ─────────────────────────────────────────────────────────────────

    async def _send(
        self,
        method: str,
        path: str,
        json: Optional[Dict[str, Any]] = None,
        headers: Optional[Dict[str, str]] = None,
    ) -> Any:
        url = url_checker(self._base_url, path)
        logger.debug(f"Consent manager request: {method} {url}")

        try:
            async with httpx.AsyncClient(
                transport=self._transport,
                timeout=self._timeout,
            ) as client:
                response = await client.request(method, url, json=json, headers=headers)
        except httpx.RequestError as e:
            logger.error(f"Consent manager unreachable ({method} {url}): {e}")
            raise UpstreamServiceException(f"Consent manager request failed: {e}")

        if response.is_error:
            logger.warning(
                f"Consent manager answered {response.status_code} for {method} {url}"
            )
            raise UpstreamServiceException(
                f"Consent manager returned {response.status_code}",
                status_code=response.status_code,
                body=decode_body(response),
            )

        return decode_body(response)

    async def _authorized_headers(self, user_key: Optional[str] = None) -> Dict[str, str]:
        if not self._participant_token:
            await self.participant_login()

        headers = {"Authorization": f"Bearer {self._participant_token}"}
        if user_key:
            headers[self.USER_KEY_HEADER] = user_key
        return headers

    async def _call(
        self,
        method: str,
        path: str,
        json: Optional[Dict[str, Any]] = None,
        user_key: Optional[str] = None,
    ) -> Any:
        headers = await self._authorized_headers(user_key)
        try:
            return await self._send(method, path, json=json, headers=headers)
        except UpstreamServiceException as e:
            # An expired participant token is replaced on the next call
            if e.status_code == 401:
                logger.warning("Participant token rejected, logging in again on next call")
                self._participant_token = None
            raise

    # ─────────────────────────────────────────────────────────────────
    # Authentication
    # ─────────────────────────────────────────────────────────────────

    async def participant_login(self) -> Dict[str, Any]:
        """
        Log the connector's participant into the consent manager.

        Stores the returned token for subsequent calls.

        Returns:
            The consent manager login response
        """
        if not self._service_key or not self._secret_key:
            raise UpstreamServiceException("Participant credentials are not configured")

        response = await self._send(
            "POST",
            "participants/login",
            json={"clientID": self._service_key, "clientSecret": self._secret_key},
        )

        token = response.get("token") if isinstance(response, dict) else None
        if token:
            self._participant_token = token
            logger.info("Participant logged into the consent manager")
        else:
            logger.warning("Participant login response carried no token")

        return response

    async def user_login(self, email: str, password: str) -> Dict[str, Any]:
        """Exchange user credentials for a consent manager session."""
        return await self._send(
            "POST",
            "users/login",
            json={"email": email, "password": password},
        )

    # ─────────────────────────────────────────────────────────────────
    # Consents
    # ─────────────────────────────────────────────────────────────────

    async def get_my_consents(self, user_key: Optional[str]) -> Any:
        """Consents of the user identified by the forwarded user key."""
        return await self._call("GET", "consents/me", user_key=user_key)

    async def get_my_consent_by_id(self, user_key: Optional[str], consent_id: str) -> Any:
        return await self._call("GET", f"consents/me/{consent_id}", user_key=user_key)

    async def get_user_consents(self, user_identifier: str) -> Any:
        return await self._call("GET", f"consents/{user_identifier}")

    async def get_user_consent_by_id(self, user_identifier: str, consent_id: str) -> Any:
        return await self._call("GET", f"consents/{user_identifier}/{consent_id}")

    async def give_consent(self, user_identifier: str, payload: Dict[str, Any]) -> Any:
        return await self._call("POST", f"consents/{user_identifier}", json=payload)

    async def trigger_data_exchange(
        self,
        consent_id: str,
        user_identifier: Optional[str] = None,
    ) -> Any:
        """
        Ask the consent manager to start the data exchange a consent authorizes.

        Without a user identifier the consent alone designates the exchange.
        """
        if user_identifier:
            path = f"consents/{user_identifier}/{consent_id}/data-exchange"
        else:
            path = f"consents/{consent_id}/data-exchange"
        return await self._call("POST", path)

    async def get_available_exchanges(self, as_role: str) -> Any:
        """Exchanges this participant can take part in as provider or consumer."""
        return await self._call("GET", f"consents/exchanges/{as_role}")

    async def post_access_token(self, consent_id: str, token: str) -> Any:
        """Register the access token generated for an exported consent."""
        return await self._call("POST", f"consents/{consent_id}/token", json={"token": token})

    # ─────────────────────────────────────────────────────────────────
    # Privacy notices
    # ─────────────────────────────────────────────────────────────────

    async def get_privacy_notices(
        self,
        user_identifier: str,
        provider_sd: str,
        consumer_sd: str,
    ) -> Any:
        return await self._call(
            "GET", f"consents/{user_identifier}/{provider_sd}/{consumer_sd}"
        )

    async def get_privacy_notice_by_id(
        self,
        user_identifier: str,
        privacy_notice_id: str,
    ) -> Any:
        return await self._call(
            "GET", f"consents/{user_identifier}/privacy-notices/{privacy_notice_id}"
        )

