import logging

from orthanc_api_client.client import OrthancApiClient
from orthanc_api_client.models.system import OrthancSystem

logger = logging.getLogger(__name__)


def get_system(api: OrthancApiClient) -> OrthancSystem:
    response = api.get('system')
    return OrthancSystem.model_validate(response.json())


def try_get_system(api: OrthancApiClient) -> OrthancSystem | None:
    """
    Get the archive system information, or `None` if the archive cannot be reached or answers
    anything unexpected. This function never raises.
    """

    try:
        return get_system(api)
    except Exception as error:
        logger.warning(f"Orthanc archive at '{api.url}' is not available: {error}")
        return None


def probe_liveness(api: OrthancApiClient) -> bool:
    """
    Check whether the archive is reachable. Any failure, including authentication failures and
    timeouts, results in `False`.
    """

    return try_get_system(api) is not None
