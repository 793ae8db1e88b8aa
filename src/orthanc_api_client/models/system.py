from pydantic import BaseModel, Field


class OrthancSystem(BaseModel):
    name        : str        = Field(alias='Name')
    version     : str        = Field(alias='Version')
    api_version : int | None = Field(None, alias='ApiVersion')
    dicom_aet   : str | None = Field(None, alias='DicomAet')
    dicom_port  : int | None = Field(None, alias='DicomPort')
