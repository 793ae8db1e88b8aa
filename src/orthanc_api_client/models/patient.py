from pydantic import BaseModel, Field


class PatientTags(BaseModel):
    patient_id   : str        = Field('', alias='PatientID')
    patient_name : str        = Field('', alias='PatientName')
    birth_date   : str | None = Field(None, alias='PatientBirthDate')
    sex          : str | None = Field(None, alias='PatientSex')


class OrthancPatient(BaseModel):
    id        : str         = Field(alias='ID')
    tags      : PatientTags = Field(alias='MainDicomTags')
    study_ids : list[str]   = Field([], alias='Studies')
