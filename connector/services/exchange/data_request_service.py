"""
Data provider client.

Forwards signed consents to the export endpoint of a data provider's connector.
"""

import logging
from typing import Any, Dict, Optional

import httpx

from common.utils.exceptions import UpstreamServiceException
from common.utils.http import decode_body
from common.utils.urls import url_checker

logger = logging.getLogger(__name__)


class DataRequestService:
    """Posts data requests to remote data provider connectors."""

    EXPORT_PATH = "consent/export"

    def __init__(
        self,
        timeout: float = 30.0,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ):
        self._timeout = timeout
        self._transport = transport

    async def post_data_request(
        self,
        data_provider_endpoint: str,
        signed_consent: Dict[str, Any],
        encrypted: str,
    ) -> Any:
        """
        Send a signed consent to a data provider's consent export endpoint.

        Args:
            data_provider_endpoint: Base URL of the provider's connector
            signed_consent: Signed consent as received from the consent manager
            encrypted: Wrapped AES key accompanying the signed consent

        Returns:
            The provider's decoded response body

        Raises:
            UpstreamServiceException: Provider unreachable or answered with an error
        """
        url = url_checker(data_provider_endpoint, self.EXPORT_PATH)
        logger.info(f"Posting data request to {url}")

        try:
            async with httpx.AsyncClient(
                transport=self._transport,
                timeout=self._timeout,
            ) as client:
                response = await client.post(
                    url,
                    json={"signedConsent": signed_consent, "encrypted": encrypted},
                )
        except httpx.RequestError as e:
            logger.error(f"Data provider unreachable ({url}): {e}")
            raise UpstreamServiceException(f"Data provider request failed: {e}")

        if response.is_error:
            raise UpstreamServiceException(
                f"Data provider returned {response.status_code}",
                status_code=response.status_code,
                body=decode_body(response),
            )

        return decode_body(response)
