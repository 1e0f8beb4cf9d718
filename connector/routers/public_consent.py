"""
FastAPI router for public consent endpoints.

Called by the consent manager and by other connectors. Responses are raw
JSON bodies; export and import answer immediately and finish their work
in a background task.
"""

import logging
from typing import Annotated, Optional

from fastapi import APIRouter, BackgroundTasks, Depends, status
from fastapi.responses import JSONResponse

from common.utils import error_status_and_body
from connector.dependencies import (
    get_consent_service,
    get_data_request_service,
    get_decryptor,
)
from connector.pipelines import consent as pipelines
from connector.schemas.consent import (
    ExportConsentRequest,
    ImportConsentRequest,
    UserLoginRequest,
)
from connector.services.consent.consent_service import ConsentService
from connector.services.consent.decryption import SignedConsentDecryptor
from connector.services.exchange.data_request_service import DataRequestService

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/consent", tags=["consent"])


def _error_response(operation: str, exc: Exception) -> JSONResponse:
    logger.error(f"{operation} failed: {exc}", exc_info=True)
    status_code, body = error_status_and_body(exc)
    return JSONResponse(status_code=status_code, content=body)


@router.post("/export")
async def export_consent(
    background_tasks: BackgroundTasks,
    consent_service: Annotated[ConsentService, Depends(get_consent_service)],
    decryptor: Annotated[Optional[SignedConsentDecryptor], Depends(get_decryptor)],
    body: Optional[ExportConsentRequest] = None,
):
    """
    Export the consent.

    Answers with a fresh access token, then decrypts the signed consent and
    registers the token with the consent manager.
    """
    if not body or not body.is_complete():
        return JSONResponse(
            status_code=status.HTTP_400_BAD_REQUEST,
            content={"error": "Missing body params from the request payload"},
        )

    try:
        token = pipelines.generate_access_token()
        background_tasks.add_task(
            pipelines.process_exported_consent,
            decryptor,
            consent_service,
            body.signedConsent,
            body.encrypted,
            token,
        )
        return JSONResponse(status_code=status.HTTP_200_OK, content={"message": "OK", "token": token})
    except Exception as e:
        return _error_response("exportConsent", e)


@router.post("/import")
async def import_consent(
    background_tasks: BackgroundTasks,
    data_request_service: Annotated[DataRequestService, Depends(get_data_request_service)],
    body: Optional[ImportConsentRequest] = None,
):
    """
    Import the consent.

    Forwards the signed consent to the export endpoint of the data provider.
    """
    if not body or not body.is_complete():
        return JSONResponse(
            status_code=status.HTTP_400_BAD_REQUEST,
            content={"error": "missing params from request payload"},
        )

    try:
        background_tasks.add_task(
            pipelines.process_imported_consent,
            data_request_service,
            body.dataProviderEndpoint,
            body.signedConsent,
            body.encrypted,
        )
        return JSONResponse(status_code=status.HTTP_200_OK, content={"message": "OK"})
    except Exception as e:
        return _error_response("importConsent", e)


@router.post("/login")
async def consent_user_login(
    consent_service: Annotated[ConsentService, Depends(get_consent_service)],
    body: Optional[UserLoginRequest] = None,
):
    """Log the user into the consent manager."""
    if not body or not body.email or not body.password:
        return JSONResponse(
            status_code=status.HTTP_400_BAD_REQUEST,
            content={"error": "missing params from request payload"},
        )

    try:
        response = await pipelines.user_login_pipeline(
            consent_service, body.email, body.password
        )
        return JSONResponse(status_code=status.HTTP_200_OK, content=response)
    except Exception as e:
        return _error_response("consentUserLogin", e)


@router.post("/participant/login")
async def consent_participant_login(
    consent_service: Annotated[ConsentService, Depends(get_consent_service)],
):
    """Log the participant into the consent manager."""
    try:
        response = await pipelines.participant_login_pipeline(consent_service)
        return JSONResponse(status_code=status.HTTP_200_OK, content=response)
    except Exception as e:
        return _error_response("consentParticipantLogin", e)
