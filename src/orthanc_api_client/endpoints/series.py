from orthanc_api_client.client import OrthancApiClient
from orthanc_api_client.endpoints.resource import fetch_record, list_identifiers
from orthanc_api_client.errors import NotFoundError
from orthanc_api_client.models.series import OrthancSeries


def try_get_series(api: OrthancApiClient, id: str) -> OrthancSeries | None:
    try:
        return get_series(api, id)
    except NotFoundError:
        return None


def get_series(api: OrthancApiClient, id: str) -> OrthancSeries:
    return fetch_record(api, 'series', id)


def get_series_instance_ids(api: OrthancApiClient, series_id: str) -> list[str]:
    return list_identifiers(api, 'instances', series_id)
