from pydantic import BaseModel, Field


class SeriesTags(BaseModel):
    description    : str | None = Field(None, alias='SeriesDescription')
    modality       : str | None = Field(None, alias='Modality')
    series_number  : str | None = Field(None, alias='SeriesNumber')
    series_uid     : str | None = Field(None, alias='SeriesInstanceUID')
    instance_count : str | None = Field(None, alias='NumberOfSeriesRelatedInstances')


class OrthancSeries(BaseModel):
    id           : str        = Field(alias='ID')
    parent_study : str        = Field(alias='ParentStudy')
    tags         : SeriesTags = Field(alias='MainDicomTags')
    instance_ids : list[str]  = Field([], alias='Instances')

    @property
    def number_of_instances(self) -> int:
        if self.tags.instance_count is not None:
            return int(self.tags.instance_count)

        return len(self.instance_ids)
