from orthanc_api_client.client import OrthancApiClient
from orthanc_api_client.endpoints.resource import fetch_record, list_identifiers
from orthanc_api_client.errors import NotFoundError
from orthanc_api_client.models.study import OrthancStudy


def try_get_study(api: OrthancApiClient, id: str) -> OrthancStudy | None:
    try:
        return get_study(api, id)
    except NotFoundError:
        return None


def get_study(api: OrthancApiClient, id: str) -> OrthancStudy:
    return fetch_record(api, 'studies', id)


def get_study_series_ids(api: OrthancApiClient, study_id: str) -> list[str]:
    return list_identifiers(api, 'series', study_id)
