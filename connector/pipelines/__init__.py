"""
Connector Pipelines.

Per-endpoint orchestration functions.
"""

from connector.pipelines.auth import login_pipeline
from connector.pipelines.consent import (
    resolve_user_identifier,
    get_my_consent_pipeline,
    get_my_consent_by_id_pipeline,
    get_user_consent_pipeline,
    get_user_consent_by_id_pipeline,
    get_privacy_notices_pipeline,
    get_privacy_notice_by_id_pipeline,
    give_consent_pipeline,
    consent_data_exchange_pipeline,
    get_available_exchanges_pipeline,
    generate_access_token,
    process_exported_consent,
    process_imported_consent,
    user_login_pipeline,
    participant_login_pipeline,
)
