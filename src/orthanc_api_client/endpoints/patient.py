from orthanc_api_client.client import OrthancApiClient
from orthanc_api_client.endpoints.resource import fetch_record, list_identifiers
from orthanc_api_client.errors import NotFoundError
from orthanc_api_client.models.patient import OrthancPatient


def get_patient_ids(api: OrthancApiClient) -> list[str]:
    return list_identifiers(api, 'patients')


def try_get_patient(api: OrthancApiClient, id: str) -> OrthancPatient | None:
    try:
        return get_patient(api, id)
    except NotFoundError:
        return None


def get_patient(api: OrthancApiClient, id: str) -> OrthancPatient:
    return fetch_record(api, 'patients', id)


def get_patient_study_ids(api: OrthancApiClient, patient_id: str) -> list[str]:
    return list_identifiers(api, 'studies', patient_id)
