from dataclasses import dataclass

import pytest
import requests

from orthanc_api_client.client import OrthancApiClient
from orthanc_api_client.config import ArchiveConfig
from orthanc_api_client.errors import NotFoundError, TransportError
from tests.util.api import create_test_client
from tests.util.fake_archive import BASE_URL, FakeArchive


@dataclass
class Setup:
    archive: FakeArchive
    api: OrthancApiClient


@pytest.fixture
def setup():
    archive = FakeArchive()
    archive.add('patients', ['p1'])
    return Setup(archive, create_test_client(archive, timeout=3.5))


def test_get_sends_credentials_and_timeout(setup: Setup):
    response = setup.api.get('patients')

    assert response.json() == ['p1']
    request = setup.archive.requests[0]
    assert request.method == 'GET'
    assert request.route == 'patients'
    assert request.auth == ('orthanc', 'secret')
    assert request.timeout == 3.5


def test_get_not_found(setup: Setup):
    with pytest.raises(NotFoundError) as error:
        setup.api.get('patients/unknown')

    assert error.value.status_code == 404
    assert error.value.route == 'patients/unknown'


def test_get_gone_is_not_found(setup: Setup):
    setup.archive.fail('patients/p1', 410)

    with pytest.raises(NotFoundError):
        setup.api.get('patients/p1')


def test_get_server_error(setup: Setup):
    setup.archive.fail('patients', 500)

    with pytest.raises(TransportError) as error:
        setup.api.get('patients')

    assert error.value.status_code == 500


def test_get_unauthorized_is_transport_error(setup: Setup):
    setup.archive.fail('patients', 401)

    with pytest.raises(TransportError) as error:
        setup.api.get('patients')

    assert error.value.status_code == 401


@pytest.mark.parametrize('failure', [
    requests.ConnectionError('Connection refused'),
    requests.Timeout('Read timed out'),
])
def test_get_network_failure(setup: Setup, failure: Exception):
    setup.archive.fail('patients', failure)

    with pytest.raises(TransportError) as error:
        setup.api.get('patients')

    assert error.value.status_code is None
    assert error.value.__cause__ is failure


def test_connect_from_config():
    archive = FakeArchive()
    config = ArchiveConfig(f'{BASE_URL}/', 'user', 'password', timeout=4.0)

    api = OrthancApiClient.connect(config, archive)  # type: ignore

    assert api.url == BASE_URL
    assert api.auth == ('user', 'password')
    assert api.timeout == 4.0
    assert api.session is archive


def test_no_credentials():
    api = OrthancApiClient(BASE_URL, None)
    assert api.auth is None


def test_password_not_in_repr():
    api = OrthancApiClient(BASE_URL, 'orthanc', 'secret')
    assert 'secret' not in repr(api)


@pytest.mark.parametrize('status_code', [301, 302, 304, 307])
def test_get_redirect_is_transport_error(setup: Setup, status_code: int):
    setup.archive.fail('patients', status_code)

    with pytest.raises(TransportError) as error:
        setup.api.get('patients')

    assert error.value.status_code == status_code
    assert error.value.route == 'patients'
    assert not isinstance(error.value, NotFoundError)


def test_post_redirect_is_transport_error(setup: Setup):
    setup.archive.fail('instances', 302, method='POST')

    with pytest.raises(TransportError) as error:
        setup.api.post('instances', data=b'DICM')

    assert error.value.status_code == 302
