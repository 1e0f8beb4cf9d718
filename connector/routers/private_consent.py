"""
FastAPI router for private consent endpoints.

Authenticated routes that read and manage consents through the consent
manager. Every response uses the {success, status, data} envelope; upstream
failures are logged and forwarded with the upstream status and body.
"""

import logging
from typing import Annotated, Any, Awaitable, Literal, Optional

from fastapi import APIRouter, Depends, Header, Query
from fastapi.responses import JSONResponse

from common.utils import restful_response, exception_response
from connector.config import Settings
from connector.dependencies import require_auth, get_consent_service, get_settings
from connector.pipelines import consent as pipelines
from connector.schemas.consent import GiveConsentRequest
from connector.services.consent.consent_service import ConsentService

logger = logging.getLogger(__name__)

router = APIRouter(
    prefix="/private/consent",
    tags=["consent"],
    dependencies=[Depends(require_auth)],
)

ConsentServiceDep = Annotated[ConsentService, Depends(get_consent_service)]


async def _respond(operation: str, pipeline: Awaitable[Any]) -> JSONResponse:
    """Await a pipeline and envelope its result, or log and forward its error."""
    try:
        return restful_response(200, await pipeline)
    except Exception as e:
        logger.error(f"{operation} failed: {e}", exc_info=True)
        return exception_response(e)


# Literal segments (me, exchanges, privacy-notices) are declared before the
# parameterized routes they would otherwise be captured by. Consequently the
# consents of users whose internalID is "me" cannot be read (GET /me, /me/{id}),
# and GET /exchanges/{x} never reads consent x of a user named "exchanges".

@router.get("/me")
async def get_my_consent(
    consent_service: ConsentServiceDep,
    x_user_key: Annotated[Optional[str], Header()] = None,
):
    """Get the consents of the user identified by the x-user-key header."""
    return await _respond(
        "getMyConsent",
        pipelines.get_my_consent_pipeline(consent_service, x_user_key),
    )


@router.get("/me/{consent_id}")
async def get_my_consent_by_id(
    consent_id: str,
    consent_service: ConsentServiceDep,
    x_user_key: Annotated[Optional[str], Header()] = None,
):
    """Get one consent of the user identified by the x-user-key header."""
    return await _respond(
        "getMyConsentById",
        pipelines.get_my_consent_by_id_pipeline(consent_service, x_user_key, consent_id),
    )


@router.get("/exchanges/{as_role}")
async def get_available_exchanges(
    as_role: Literal["provider", "consumer"],
    consent_service: ConsentServiceDep,
    app_settings: Annotated[Settings, Depends(get_settings)],
    user_id: Annotated[Optional[str], Query(alias="userId")] = None,
):
    """
    Get all the exchanges available to this participant.

    Each exchange carries the privacyNoticeEndpoint to fetch its privacy notices.
    """
    return await _respond(
        "getAvailableExchanges",
        pipelines.get_available_exchanges_pipeline(
            consent_service,
            connector_endpoint=app_settings.CONNECTOR_ENDPOINT,
            as_role=as_role,
            user_id=user_id,
        ),
    )


@router.get("/{user_id}/privacy-notices/{privacy_notice_id}")
async def get_user_privacy_notice_by_id(
    user_id: str,
    privacy_notice_id: str,
    consent_service: ConsentServiceDep,
):
    return await _respond(
        "getUserPrivacyNoticeById",
        pipelines.get_privacy_notice_by_id_pipeline(
            consent_service, user_id, privacy_notice_id
        ),
    )


@router.post("/{user_id}/{consent_id}/data-exchange")
async def consent_data_exchange(
    user_id: str,
    consent_id: str,
    consent_service: ConsentServiceDep,
):
    """Trigger the data exchange by the user based on a consent."""
    return await _respond(
        "consentDataExchange",
        pipelines.consent_data_exchange_pipeline(consent_service, user_id, consent_id),
    )


@router.get("/{user_id}/{provider_sd}/{consumer_sd}")
async def get_user_privacy_notices(
    user_id: str,
    provider_sd: str,
    consumer_sd: str,
    consent_service: ConsentServiceDep,
):
    """Get the privacy notices between a provider and a consumer for a user."""
    return await _respond(
        "getUserPrivacyNotices",
        pipelines.get_privacy_notices_pipeline(
            consent_service, user_id, provider_sd, consumer_sd
        ),
    )


@router.get("/{user_id}/{consent_id}")
async def get_user_consent_by_id(
    user_id: str,
    consent_id: str,
    consent_service: ConsentServiceDep,
):
    return await _respond(
        "getUserConsentById",
        pipelines.get_user_consent_by_id_pipeline(consent_service, user_id, consent_id),
    )


@router.get("/{user_id}")
async def get_user_consent(
    user_id: str,
    consent_service: ConsentServiceDep,
):
    """Get the consents of a user by internal id."""
    return await _respond(
        "getUserConsent",
        pipelines.get_user_consent_pipeline(consent_service, user_id),
    )


@router.post("/{user_id}")
async def give_consent(
    user_id: str,
    consent_service: ConsentServiceDep,
    body: Optional[GiveConsentRequest] = None,
    trigger_data_exchange: Annotated[Optional[str], Query(alias="triggerDataExchange")] = None,
):
    """
    Give consent for a user.

    With ?triggerDataExchange=true the data exchange starts right away,
    unless the consent manager still waits on the user (e.g. email validation).
    """
    payload = body.model_dump(exclude_unset=True) if body else {}

    return await _respond(
        "giveConsent",
        pipelines.give_consent_pipeline(
            consent_service,
            user_id,
            payload,
            trigger_data_exchange=trigger_data_exchange == "true",
        ),
    )
