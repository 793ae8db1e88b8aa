from dataclasses import dataclass

import pytest
import requests
from pydantic import ValidationError

from orthanc_api_client.aggregator import PLACEHOLDER_MODALITY, HierarchyAggregator, summarize_study
from orthanc_api_client.errors import NotFoundError, TransportError
from orthanc_api_client.models.study import OrthancStudy
from tests.util.api import create_test_client
from tests.util.fake_archive import FakeArchive
from tests.util.orthanc_records import add_patient, create_test_archive, patient_record, study_record


@dataclass
class Setup:
    archive: FakeArchive
    aggregator: HierarchyAggregator


@pytest.fixture
def setup():
    archive = create_test_archive()
    return Setup(archive, HierarchyAggregator(create_test_client(archive), max_workers=4))


def test_aggregate_one_group_per_patient(setup: Setup):
    groups = setup.aggregator.aggregate()

    assert [group.patient_id for group in groups] == ['PAT-002', 'PAT-001']
    assert [group.patient_name for group in groups] == ['DOE^JANE', 'DOE^JOHN']


def test_aggregate_keeps_studies_order(setup: Setup):
    groups = setup.aggregator.aggregate()

    assert [study.study_id for study in groups[0].studies] == ['s21', 's22']
    assert [study.study_id for study in groups[1].studies] == ['s11']


def test_aggregate_reversed_patients_order(setup: Setup):
    setup.archive.add('patients', ['p1', 'p2'])

    groups = setup.aggregator.aggregate()

    assert [group.patient_id for group in groups] == ['PAT-001', 'PAT-002']


def test_aggregate_collapses_duplicate_patients(setup: Setup):
    setup.archive.add('patients', ['p2', 'p1', 'p2'])

    groups = setup.aggregator.aggregate()

    assert [group.patient_id for group in groups] == ['PAT-002', 'PAT-001']
    assert setup.archive.routes().count('patients/p2') == 1


def test_aggregate_empty_archive(setup: Setup):
    setup.archive.add('patients', [])

    assert setup.aggregator.aggregate() == []
    assert setup.archive.routes() == ['patients']


def test_aggregate_patient_without_studies(setup: Setup):
    add_patient(setup.archive, patient_record('p3', 'PAT-003', 'ROE^RICHARD', []), [])
    setup.archive.add('patients', ['p3'])

    groups = setup.aggregator.aggregate()

    assert len(groups) == 1
    assert groups[0].studies == ()


def test_aggregate_study_summary(setup: Setup):
    study = setup.aggregator.aggregate()[0].studies[0]

    assert study.study_id == 's21'
    assert study.study_date == '20240315'
    assert study.modality == PLACEHOLDER_MODALITY == 'DICOM'
    assert study.description == 'Chest CT'
    assert study.accession_number == 'ACC-s21'
    assert study.image_url == 'orthanc:s21'
    assert study.media_type == 'dicom'
    assert study.source == 'orthanc'
    assert study.orthanc_id == 's21'


def test_aggregate_default_description(setup: Setup):
    study = setup.aggregator.aggregate()[0].studies[1]
    assert study.description == 'No description'


def test_aggregate_does_not_fetch_series(setup: Setup):
    setup.aggregator.aggregate()

    routes = setup.archive.routes()
    assert not any(route.startswith('series') or route.endswith('/series') for route in routes)
    assert not any(route.startswith('instances') for route in routes)


def test_aggregate_drops_study_of_unknown_patient(setup: Setup):
    add_patient(setup.archive, patient_record('p1', 'PAT-001', 'DOE^JOHN', ['s11', 's12']), [
        study_record('s11', 'p1'),
        study_record('s12', 'p9'),
    ])

    groups = setup.aggregator.aggregate()

    assert [study.study_id for study in groups[1].studies] == ['s11']


def test_aggregate_fails_if_studies_listing_fails(setup: Setup):
    setup.archive.fail('patients/p1/studies', requests.ConnectionError('Connection reset'))

    with pytest.raises(TransportError):
        setup.aggregator.aggregate()


def test_aggregate_fails_if_patient_is_missing(setup: Setup):
    setup.archive.add('patients', ['p2', 'p1', 'p3'])

    with pytest.raises(NotFoundError):
        setup.aggregator.aggregate()


def test_aggregate_summary_is_immutable(setup: Setup):
    group = setup.aggregator.aggregate()[0]

    with pytest.raises(ValidationError):
        group.studies[0].media_type = 'video'  # type: ignore

    with pytest.raises(ValidationError):
        group.patient_name = 'ANONYMOUS'  # type: ignore


def test_aggregate_serializes_to_camel_case(setup: Setup):
    group = setup.aggregator.aggregate()[1]

    assert group.model_dump(by_alias=True) == {
        'patientId': 'PAT-001',
        'patientName': 'DOE^JOHN',
        'studies': ({
            'studyId': 's11',
            'studyDate': '20240315',
            'modality': 'DICOM',
            'description': 'Brain MRI',
            'accessionNumber': 'ACC-s11',
            'imageUrl': 'orthanc:s11',
            'mediaType': 'dicom',
            'source': 'orthanc',
            'orthancId': 's11',
        },),
    }


def test_list_series(setup: Setup):
    series = setup.aggregator.list_series('s11')

    assert [item.id for item in series] == ['r11']
    assert series[0].tags.modality == 'MR'
    assert setup.archive.routes() == ['studies/s11/series', 'series/r11']


def test_list_series_unknown_study(setup: Setup):
    with pytest.raises(NotFoundError):
        setup.aggregator.list_series('s99')


def test_list_instances(setup: Setup):
    instances = setup.aggregator.list_instances('r11')

    assert [instance.id for instance in instances] == ['i1', 'i2']
    assert [instance.index_in_series for instance in instances] == [1, 2]


def test_summarize_study_without_tags():
    study = OrthancStudy.model_validate({'ID': 's1', 'ParentPatient': 'p1', 'MainDicomTags': {}})
    summary = summarize_study(study)

    assert summary.modality == 'DICOM'
    assert summary.description == 'No description'
    assert summary.study_date is None
    assert summary.accession_number is None
