from typing import Any, Literal, overload

from pydantic import TypeAdapter

from orthanc_api_client.client import OrthancApiClient
from orthanc_api_client.models.instance import OrthancInstance
from orthanc_api_client.models.patient import OrthancPatient
from orthanc_api_client.models.series import OrthancSeries
from orthanc_api_client.models.study import OrthancStudy

ResourceKind = Literal['patients', 'studies', 'series', 'instances']

# Kind of the resource that owns each kind of resource in the archive hierarchy.
PARENT_KINDS: dict[ResourceKind, ResourceKind] = {
    'studies':   'patients',
    'series':    'studies',
    'instances': 'series',
}

RECORD_MODELS: dict[ResourceKind, type[OrthancPatient | OrthancStudy | OrthancSeries | OrthancInstance]] = {
    'patients':  OrthancPatient,
    'studies':   OrthancStudy,
    'series':    OrthancSeries,
    'instances': OrthancInstance,
}

ListingBody = TypeAdapter(list[str | dict[str, Any]])
IdentifierList = TypeAdapter(list[str])


def list_identifiers(api: OrthancApiClient, kind: ResourceKind, parent_id: str | None = None) -> list[str]:
    """
    Get the archive identifiers of all the resources of a given kind, or only of those owned by a
    given parent resource, in the order in which the archive lists them.
    """

    if parent_id is None:
        route = kind
    else:
        if kind not in PARENT_KINDS:
            raise ValueError(f"Resources of kind '{kind}' have no parent resource.")

        route = f'{PARENT_KINDS[kind]}/{parent_id}/{kind}'

    response = api.get(route)
    body = ListingBody.validate_python(response.json())
    return IdentifierList.validate_python(get_identifiers(body))


def get_identifiers(body: list[str | dict[str, Any]]) -> list[str]:
    """
    Extract the identifiers from a listing body. The root listings return plain identifiers while
    the child listings return expanded resources.
    """

    return [item.get('ID') if isinstance(item, dict) else item for item in body]


@overload
def fetch_record(api: OrthancApiClient, kind: Literal['patients'], id: str) -> OrthancPatient: ...

@overload
def fetch_record(api: OrthancApiClient, kind: Literal['studies'], id: str) -> OrthancStudy: ...

@overload
def fetch_record(api: OrthancApiClient, kind: Literal['series'], id: str) -> OrthancSeries: ...

@overload
def fetch_record(api: OrthancApiClient, kind: Literal['instances'], id: str) -> OrthancInstance: ...


def fetch_record(api: OrthancApiClient, kind: ResourceKind, id: str):  # type: ignore
    """
    Get the record of a resource of a given kind from the archive.
    """

    response = api.get(f'{kind}/{id}')
    return RECORD_MODELS[kind].model_validate(response.json())
