from requests_toolbelt import MultipartEncoder

from orthanc_api_client.client import OrthancApiClient
from orthanc_api_client.endpoints.resource import fetch_record
from orthanc_api_client.errors import ArchiveError, NotFoundError, UploadError
from orthanc_api_client.models.instance import OrthancInstance, PostInstance


def try_get_instance(api: OrthancApiClient, id: str) -> OrthancInstance | None:
    try:
        return get_instance(api, id)
    except NotFoundError:
        return None


def get_instance(api: OrthancApiClient, id: str) -> OrthancInstance:
    return fetch_record(api, 'instances', id)


def post_instance(api: OrthancApiClient, data: bytes, file_name: str = 'upload.dcm') -> PostInstance:
    """
    Upload a DICOM file to the archive as a multipart body and return the archive answer, which
    notably contains the identifier of the new instance.
    """

    multipart = MultipartEncoder(fields={
        'file': (file_name, data, 'application/dicom'),
    })

    try:
        response = api.post('instances', data=multipart, headers={'Content-Type': multipart.content_type})
    except ArchiveError as error:
        # Network failures are not upload rejections.
        if error.status_code is None:
            raise

        raise UploadError(
            f"The archive rejected the upload of '{file_name}' with HTTP status {error.status_code}.",
            error.route,
            error.status_code,
        ) from error

    return PostInstance.model_validate(response.json())


def upload_binary(api: OrthancApiClient, data: bytes, file_name: str = 'upload.dcm') -> str:
    """
    Upload a DICOM file to the archive and return the identifier of the new instance.
    """

    return post_instance(api, data, file_name).id
