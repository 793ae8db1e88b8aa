from typing import Literal

from pydantic import BaseModel, Field


class InstanceTags(BaseModel):
    instance_uid    : str | None = Field(None, alias='SOPInstanceUID')
    instance_number : str | None = Field(None, alias='InstanceNumber')


class OrthancInstance(BaseModel):
    id              : str          = Field(alias='ID')
    parent_series   : str | None   = Field(None, alias='ParentSeries')
    file_size       : int          = Field(alias='FileSize')
    file_uuid       : str          = Field(alias='FileUuid')
    index_in_series : int | None   = Field(None, alias='IndexInSeries')
    tags            : InstanceTags = Field(alias='MainDicomTags')


class PostInstance(BaseModel):
    id             : str                                = Field(alias='ID')
    path           : str                                = Field(alias='Path')
    status         : Literal['Success', 'AlreadyStored'] = Field(alias='Status')
    parent_patient : str | None                         = Field(None, alias='ParentPatient')
    parent_study   : str | None                         = Field(None, alias='ParentStudy')
    parent_series  : str | None                         = Field(None, alias='ParentSeries')
