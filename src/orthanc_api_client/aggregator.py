import logging

from orthanc_api_client.client import OrthancApiClient
from orthanc_api_client.config import DEFAULT_MAX_WORKERS
from orthanc_api_client.endpoints.instance import get_instance
from orthanc_api_client.endpoints.patient import get_patient, get_patient_ids, get_patient_study_ids
from orthanc_api_client.endpoints.series import get_series, get_series_instance_ids
from orthanc_api_client.endpoints.study import get_study, get_study_series_ids
from orthanc_api_client.models.grouped import GroupedPatientStudy, StudySummary
from orthanc_api_client.models.instance import OrthancInstance
from orthanc_api_client.models.patient import OrthancPatient
from orthanc_api_client.models.series import OrthancSeries
from orthanc_api_client.models.study import OrthancStudy
from orthanc_api_client.util.concurrency import fan_out
from orthanc_api_client.util.iter import deduplicate

# The modality of a study is only known once its series are fetched.
PLACEHOLDER_MODALITY = 'DICOM'

DEFAULT_DESCRIPTION = 'No description'

logger = logging.getLogger(__name__)


class HierarchyAggregator:
    """
    Walk the patient, study, series and instance hierarchy of an Orthanc archive.

    Each level is fetched by listing the identifiers of its resources and then fetching all the
    resources concurrently. Any failed request aborts the whole operation.
    """

    api: OrthancApiClient
    max_workers: int

    def __init__(self, api: OrthancApiClient, max_workers: int = DEFAULT_MAX_WORKERS):
        self.api = api
        self.max_workers = max_workers

    def get_patients(self) -> list[OrthancPatient]:
        patient_ids = deduplicate(get_patient_ids(self.api))
        return fan_out(lambda id: get_patient(self.api, id), patient_ids, self.max_workers)

    def get_patient_studies(self, patient_id: str) -> list[OrthancStudy]:
        study_ids = get_patient_study_ids(self.api, patient_id)
        return fan_out(lambda id: get_study(self.api, id), study_ids, self.max_workers)

    def list_series(self, study_id: str) -> list[OrthancSeries]:
        series_ids = get_study_series_ids(self.api, study_id)
        return fan_out(lambda id: get_series(self.api, id), series_ids, self.max_workers)

    def list_instances(self, series_id: str) -> list[OrthancInstance]:
        instance_ids = get_series_instance_ids(self.api, series_id)
        return fan_out(lambda id: get_instance(self.api, id), instance_ids, self.max_workers)

    def aggregate(self) -> list[GroupedPatientStudy]:
        """
        Get all the studies of the archive grouped by patient, in the order in which the archive
        lists the patients and the studies of each patient.
        """

        patients = self.get_patients()
        patients_studies = fan_out(
            lambda patient: self.get_patient_studies(patient.id),
            patients,
            self.max_workers,
        )

        # Studies are grouped by the patient they declare, which must be part of this pass.
        summaries: dict[str, list[StudySummary]] = {patient.id: [] for patient in patients}
        for studies in patients_studies:
            for study in studies:
                if study.parent_patient not in summaries:
                    logger.warning(
                        f"Dropping study '{study.id}' whose patient '{study.parent_patient}' is unknown."
                    )
                    continue

                summaries[study.parent_patient].append(summarize_study(study))

        logger.info(f"Aggregated {sum(map(len, summaries.values()))} studies of {len(patients)} patients.")

        return [
            GroupedPatientStudy(
                patient_id   = patient.tags.patient_id,
                patient_name = patient.tags.patient_name,
                studies      = tuple(summaries[patient.id]),
            )
            for patient in patients
        ]


def summarize_study(study: OrthancStudy) -> StudySummary:
    """
    Create the display summary of an archive study.
    """

    return StudySummary(
        study_id         = study.id,
        study_date       = study.tags.study_date,
        modality         = PLACEHOLDER_MODALITY,
        description      = study.tags.description or DEFAULT_DESCRIPTION,
        accession_number = study.tags.accession_number,
        image_url        = f'orthanc:{study.id}',
        media_type       = 'dicom',
        source           = 'orthanc',
        orthanc_id       = study.id,
    )
