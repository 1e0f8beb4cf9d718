"""
Consent pipeline functions.

Stateless orchestration between the connector's routes, the local User
store and the consent manager. Errors propagate to the routers, which
log them and forward the upstream status/body.
"""

import logging
import uuid
from typing import Any, Dict, Optional

from common.utils.exceptions import NotFoundException, UpstreamServiceException
from common.utils.urls import url_checker
from connector.models import User
from connector.services.consent.consent_service import ConsentService
from connector.services.consent.decryption import SignedConsentDecryptor
from connector.services.exchange.data_request_service import DataRequestService

logger = logging.getLogger(__name__)

EMAIL_VALIDATION_CASE = "email-validation-requested"
USER_ID_PLACEHOLDER = "{userId}"


# ─────────────────────────────────────────────────────────────────
# User lookup
# ─────────────────────────────────────────────────────────────────

async def resolve_user_identifier(internal_id: str) -> str:
    """
    Resolve the consent manager identifier of an internal user.

    Args:
        internal_id: The user's internalID

    Returns:
        The user's userIdentifier

    Raises:
        NotFoundException: Unknown user, or user without a userIdentifier
    """
    user = await User.find_one({"internalID": internal_id})

    if not user:
        logger.error(f"User not found for internalID {internal_id}")
        raise NotFoundException("User not found", code="USER_NOT_FOUND")

    if not user.user_identifier:
        logger.error(f"User {internal_id} has no userIdentifier")
        raise NotFoundException(
            "User has no userIdentifier",
            code="USER_IDENTIFIER_MISSING",
        )

    return user.user_identifier


# ─────────────────────────────────────────────────────────────────
# Private consent pipelines
# ─────────────────────────────────────────────────────────────────

async def get_my_consent_pipeline(
    consent_service: ConsentService,
    user_key: Optional[str],
) -> Any:
    """Consents of the user behind the forwarded consent manager key."""
    return await consent_service.get_my_consents(user_key)


async def get_my_consent_by_id_pipeline(
    consent_service: ConsentService,
    user_key: Optional[str],
    consent_id: str,
) -> Any:
    return await consent_service.get_my_consent_by_id(user_key, consent_id)


async def get_user_consent_pipeline(
    consent_service: ConsentService,
    user_id: str,
) -> Any:
    """
    Consents of an internal user.

    Args:
        consent_service: Consent manager client
        user_id: The user's internalID

    Returns:
        The consent manager's consent list for the user
    """
    user_identifier = await resolve_user_identifier(user_id)
    return await consent_service.get_user_consents(user_identifier)


async def get_user_consent_by_id_pipeline(
    consent_service: ConsentService,
    user_id: str,
    consent_id: str,
) -> Any:
    user_identifier = await resolve_user_identifier(user_id)
    return await consent_service.get_user_consent_by_id(user_identifier, consent_id)


async def get_privacy_notices_pipeline(
    consent_service: ConsentService,
    user_id: str,
    provider_sd: str,
    consumer_sd: str,
) -> Any:
    """Privacy notices applying between a provider and a consumer for a user."""
    user_identifier = await resolve_user_identifier(user_id)
    return await consent_service.get_privacy_notices(
        user_identifier, provider_sd, consumer_sd
    )


async def get_privacy_notice_by_id_pipeline(
    consent_service: ConsentService,
    user_id: str,
    privacy_notice_id: str,
) -> Any:
    user_identifier = await resolve_user_identifier(user_id)
    return await consent_service.get_privacy_notice_by_id(
        user_identifier, privacy_notice_id
    )


async def give_consent_pipeline(
    consent_service: ConsentService,
    user_id: str,
    payload: Dict[str, Any],
    trigger_data_exchange: bool = False,
) -> Any:
    """
    Give consent on behalf of a user, optionally starting the data exchange.

    The exchange is only triggered when the consent manager answered with a
    consent rather than a pending case such as an email validation request.

    Args:
        consent_service: Consent manager client
        user_id: The user's internalID
        payload: Give-consent body forwarded to the consent manager
        trigger_data_exchange: Start the data exchange for the new consent

    Returns:
        The consent manager's give-consent response
    """
    user_identifier = await resolve_user_identifier(user_id)
    response = await consent_service.give_consent(user_identifier, payload)

    if trigger_data_exchange and isinstance(response, dict):
        case = response.get("case")
        if case:
            logger.info(f"Data exchange not triggered, consent is pending: {case}")
        elif response.get("_id"):
            logger.info(f"Triggering data exchange for consent {response['_id']}")
            await consent_service.trigger_data_exchange(response["_id"])
        else:
            logger.warning("Data exchange not triggered, consent response has no _id")

    return response


async def consent_data_exchange_pipeline(
    consent_service: ConsentService,
    user_id: str,
    consent_id: str,
) -> Any:
    """Trigger the data exchange a user's consent authorizes."""
    user_identifier = await resolve_user_identifier(user_id)
    return await consent_service.trigger_data_exchange(consent_id, user_identifier)


async def get_available_exchanges_pipeline(
    consent_service: ConsentService,
    connector_endpoint: str,
    as_role: str,
    user_id: Optional[str] = None,
) -> Any:
    """
    List available exchanges, each with the URL of its privacy notices.

    The privacy notice URL always reads provider first, consumer second;
    which side is this participant depends on as_role.

    Args:
        consent_service: Consent manager client
        connector_endpoint: Public base URL of this connector
        as_role: "provider" or "consumer"
        user_id: Optional internal user id; a placeholder is used without it

    Returns:
        The consent manager response with privacyNoticeEndpoint on each exchange
    """
    response = await consent_service.get_available_exchanges(as_role)

    if not isinstance(response, dict) or not response.get("exchanges"):
        return response

    participant_sd = (response.get("participant") or {}).get("base64SelfDescription")
    if not participant_sd:
        raise UpstreamServiceException(
            "Available exchanges response has no participant self-description"
        )

    user_segment = user_id or USER_ID_PLACEHOLDER

    exchanges = []
    for exchange in response["exchanges"]:
        exchange_sd = exchange.get("base64SelfDescription")
        if not exchange_sd:
            raise UpstreamServiceException(
                "Available exchange has no self-description"
            )
        provider_sd = participant_sd if as_role == "provider" else exchange_sd
        consumer_sd = participant_sd if as_role == "consumer" else exchange_sd
        exchanges.append({
            **exchange,
            "privacyNoticeEndpoint": url_checker(
                connector_endpoint,
                f"private/consent/{user_segment}/{provider_sd}/{consumer_sd}",
            ),
        })

    response["exchanges"] = exchanges
    return response


# ─────────────────────────────────────────────────────────────────
# Public consent pipelines
# ─────────────────────────────────────────────────────────────────

def generate_access_token() -> str:
    """Generate the access token handed out for an exported consent."""
    return str(uuid.uuid4())


async def process_exported_consent(
    decryptor: Optional[SignedConsentDecryptor],
    consent_service: ConsentService,
    signed_consent: Dict[str, Any],
    encrypted: str,
    token: str,
) -> None:
    """
    Decrypt an exported consent and register its access token.

    Runs after the response has been sent, so failures are logged here.
    """
    try:
        if decryptor is None:
            raise ValueError("No private key configured to decrypt consents")

        consent = decryptor.decrypt(signed_consent, encrypted)
        consent_id = consent.get("_id")
        if not consent_id:
            raise ValueError("Decrypted consent has no _id")

        await consent_service.post_access_token(consent_id, token)
        logger.info(f"Access token registered for consent {consent_id}")
    except Exception as e:
        logger.error(f"Failed to process exported consent: {e}", exc_info=True)


async def process_imported_consent(
    data_request_service: DataRequestService,
    data_provider_endpoint: str,
    signed_consent: Dict[str, Any],
    encrypted: str,
) -> None:
    """
    Forward a signed consent to the data provider's export endpoint.

    Runs after the response has been sent, so failures are logged here.
    """
    try:
        await data_request_service.post_data_request(
            data_provider_endpoint, signed_consent, encrypted
        )
    except Exception as e:
        logger.error(
            f"Failed to post data request to {data_provider_endpoint}: {e}",
            exc_info=True,
        )


async def user_login_pipeline(
    consent_service: ConsentService,
    email: str,
    password: str,
) -> Any:
    """
    Log a user into the consent manager and remember their consent id.

    The consentID is only written the first time it becomes known.
    """
    user = await User.find_one({"email": email})

    response = await consent_service.user_login(email, password)

    consent_id = response.get("_id") if isinstance(response, dict) else None
    if not user:
        logger.warning(f"Consent login for {email} has no matching local user")
    elif consent_id and not user.consent_id:
        user.consent_id = consent_id
        await user.save()
        logger.info(f"Stored consentID for user {user.internal_id}")

    return response


async def participant_login_pipeline(consent_service: ConsentService) -> Any:
    """Refresh the participant session with the consent manager."""
    return await consent_service.participant_login()
