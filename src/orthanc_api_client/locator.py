"""
Functions building the URLs used by a viewer to retrieve DICOM data from the archive. These
functions do not send any request and do not check that the resources exist.
"""


def get_file_url(base_url: str, instance_id: str) -> str:
    """
    Get the URL of the raw DICOM file of an instance.
    """

    return f'{base_url}/instances/{instance_id}/file'


def get_preview_url(base_url: str, instance_id: str) -> str:
    """
    Get the URL of the rendered PNG preview of an instance.
    """

    return f'{base_url}/instances/{instance_id}/preview'


def get_wado_url(base_url: str, study_uid: str, series_uid: str, instance_uid: str) -> str:
    """
    Get the WADO-URI of an instance from its study, series and SOP instance UIDs.
    """

    # Caches may key on the literal URL, keep the parameters order stable.
    return (
        f'{base_url}/wado'
        f'?requestType=WADO'
        f'&studyUID={study_uid}'
        f'&seriesUID={series_uid}'
        f'&objectUID={instance_uid}'
        f'&contentType=application/dicom'
    )
