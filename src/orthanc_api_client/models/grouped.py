from typing import Literal

from pydantic import BaseModel, ConfigDict, Field

MediaType = Literal['dicom', 'video', '3d']
MediaSource = Literal['orthanc', 'local']


class StudySummary(BaseModel):
    """
    Display-ready summary of a study. The media type and source are decided when the summary is
    created and cannot be changed afterwards.
    """

    model_config = ConfigDict(frozen=True)

    study_id         : str         = Field(serialization_alias='studyId')
    study_date       : str | None  = Field(serialization_alias='studyDate')
    modality         : str         = Field(serialization_alias='modality')
    description      : str         = Field(serialization_alias='description')
    accession_number : str | None  = Field(serialization_alias='accessionNumber')
    image_url        : str         = Field(serialization_alias='imageUrl')
    media_type       : MediaType   = Field(serialization_alias='mediaType')
    source           : MediaSource = Field(serialization_alias='source')
    orthanc_id       : str | None  = Field(None, serialization_alias='orthancId')


class GroupedPatientStudy(BaseModel):
    """
    The studies of a patient, in the order in which the archive lists them.
    """

    model_config = ConfigDict(frozen=True)

    patient_id   : str                     = Field(serialization_alias='patientId')
    patient_name : str                     = Field(serialization_alias='patientName')
    studies      : tuple[StudySummary, ...] = Field(serialization_alias='studies')
