from pydantic import BaseModel, Field


class StudyTags(BaseModel):
    study_date       : str | None = Field(None, alias='StudyDate')
    description      : str | None = Field(None, alias='StudyDescription')
    accession_number : str | None = Field(None, alias='AccessionNumber')
    study_uid        : str | None = Field(None, alias='StudyInstanceUID')
    series_count     : str | None = Field(None, alias='NumberOfStudyRelatedSeries')


class OrthancStudy(BaseModel):
    id             : str       = Field(alias='ID')
    parent_patient : str       = Field(alias='ParentPatient')
    tags           : StudyTags = Field(alias='MainDicomTags')
    series_ids     : list[str] = Field([], alias='Series')

    @property
    def number_of_series(self) -> int:
        """
        Number of series of the study, read from the DICOM tags if the archive reports it, or
        counted from the series identifiers otherwise.
        """

        if self.tags.series_count is not None:
            return int(self.tags.series_count)

        return len(self.series_ids)
