import logging
import threading
from concurrent.futures import Future, ThreadPoolExecutor
from dataclasses import dataclass
from enum import Enum
from typing import Literal

from orthanc_api_client.aggregator import HierarchyAggregator
from orthanc_api_client.client import OrthancApiClient
from orthanc_api_client.config import DEFAULT_MAX_WORKERS
from orthanc_api_client.endpoints.instance import upload_binary
from orthanc_api_client.endpoints.system import probe_liveness
from orthanc_api_client.locator import get_file_url, get_preview_url, get_wado_url
from orthanc_api_client.models.grouped import GroupedPatientStudy
from orthanc_api_client.models.instance import OrthancInstance
from orthanc_api_client.models.series import OrthancSeries

LOAD_ERROR_MESSAGE = 'Failed to load studies from Orthanc'

SessionView = Literal['unchecked', 'unreachable', 'idle', 'loading', 'error', 'loaded']

logger = logging.getLogger(__name__)


class Availability(Enum):
    UNCHECKED   = 'unchecked'
    CHECKING    = 'checking'
    AVAILABLE   = 'available'
    UNAVAILABLE = 'unavailable'


class LoadState(Enum):
    IDLE        = 'idle'
    LOADING     = 'loading'
    LOADED      = 'loaded'
    LOAD_FAILED = 'load_failed'


@dataclass(frozen=True)
class SessionSnapshot:
    """
    Immutable view of the state of an archive session at a given time.
    """

    availability: Availability
    load_state:   LoadState
    groups:       tuple[GroupedPatientStudy, ...]
    error:        str | None

    @property
    def is_available(self) -> bool:
        return self.availability == Availability.AVAILABLE

    @property
    def is_loading(self) -> bool:
        return self.load_state == LoadState.LOADING

    @property
    def view(self) -> SessionView:
        """
        The state to render in a user interface.
        """

        match self.availability:
            case Availability.UNCHECKED | Availability.CHECKING:
                return 'unchecked'
            case Availability.UNAVAILABLE:
                return 'unreachable'

        match self.load_state:
            case LoadState.IDLE:
                return 'idle'
            case LoadState.LOADING:
                return 'loading'
            case LoadState.LOAD_FAILED:
                return 'error'
            case LoadState.LOADED:
                return 'loaded'


class ArchiveSession:
    """
    Session with an Orthanc archive, which tracks whether the archive is reachable and loads the
    studies of the archive grouped by patient in the background.

    At most one load runs at a time. Each load is numbered, and the result of a load that is not
    the latest one is discarded when it completes.
    """

    api: OrthancApiClient
    aggregator: HierarchyAggregator
    keep_snapshot_on_error: bool

    def __init__(
        self,
        api: OrthancApiClient,
        max_workers: int = DEFAULT_MAX_WORKERS,
        keep_snapshot_on_error: bool = True,
        check: bool = True,
    ):
        """
        :param api:                    The client used to talk to the archive
        :param max_workers:            The maximum number of concurrent requests per hierarchy level
        :param keep_snapshot_on_error: Whether a failed load keeps the groups of the last
                                       successful load or clears them
        :param check:                  Whether to check the archive availability right away
        """

        self.api = api
        self.aggregator = HierarchyAggregator(api, max_workers)
        self.keep_snapshot_on_error = keep_snapshot_on_error

        self._lock = threading.Lock()
        # A superseded load may still be running while a new one starts.
        self._executor = ThreadPoolExecutor(max_workers=2, thread_name_prefix='archive-session')
        # Last settled availability, `CHECKING` is only reported while no probe has completed yet.
        self._availability = Availability.UNCHECKED
        self._checks = 0
        self._closed = False
        self._load_state = LoadState.IDLE
        self._groups: tuple[GroupedPatientStudy, ...] = ()
        self._error: str | None = None
        self._sequence = 0
        self._in_flight: Future[SessionSnapshot] | None = None

        if check:
            self.check_availability()

    def __enter__(self) -> 'ArchiveSession':
        return self

    def __exit__(self, *args: object):
        self.close()

    def close(self):
        """
        Stop the background loads executor, waiting for the running load to complete.
        """

        with self._lock:
            self._closed = True

        self._executor.shutdown(wait=True)

    def snapshot(self) -> SessionSnapshot:
        with self._lock:
            return self._snapshot()

    def _snapshot(self) -> SessionSnapshot:
        availability = self._availability
        if availability == Availability.UNCHECKED and self._checks > 0:
            availability = Availability.CHECKING

        return SessionSnapshot(availability, self._load_state, self._groups, self._error)

    @property
    def is_available(self) -> bool:
        return self.snapshot().is_available

    @property
    def is_loading(self) -> bool:
        return self.snapshot().is_loading

    @property
    def grouped_studies(self) -> tuple[GroupedPatientStudy, ...]:
        return self.snapshot().groups

    @property
    def error(self) -> str | None:
        return self.snapshot().error

    def check_availability(self) -> bool:
        """
        Probe the archive and record whether it is available. A change of availability
        invalidates the load in flight, if any.

        The last known availability stays in effect while the archive is being probed.
        """

        with self._lock:
            self._checks += 1

        try:
            available = probe_liveness(self.api)
        finally:
            with self._lock:
                self._checks -= 1

        availability = Availability.AVAILABLE if available else Availability.UNAVAILABLE
        with self._lock:
            changed = self._availability != availability
            self._availability = availability
            if changed and self._in_flight is not None:
                logger.info("Archive availability changed, discarding the load in flight.")
                self._sequence += 1
                self._in_flight = None
                self._load_state = LoadState.IDLE

        logger.info(f"Orthanc archive at '{self.api.url}' is {availability.value}.")
        return available

    def refresh(self, force: bool = False) -> Future[SessionSnapshot] | None:
        """
        Load the studies of the archive in the background and return a future of the resulting
        session snapshot, or `None` without sending any request if the archive is not available.

        If a load is already running, its future is returned unless `force` is set, in which case
        a new load supersedes it.

        Raise a `RuntimeError` if the session is closed.
        """

        with self._lock:
            if self._closed:
                raise RuntimeError("Cannot refresh a closed archive session.")

            if self._availability != Availability.AVAILABLE:
                logger.debug("Orthanc archive is not available, skipping refresh.")
                return None

            if self._in_flight is not None and not force:
                return self._in_flight

            # The state only changes once the load is scheduled.
            future = self._executor.submit(self._load, self._sequence + 1)
            self._sequence += 1
            self._load_state = LoadState.LOADING
            self._error = None
            self._in_flight = future
            return future

    def _load(self, sequence: int) -> SessionSnapshot:
        try:
            groups = self.aggregator.aggregate()
        except Exception as error:
            with self._lock:
                stale = sequence != self._sequence
                if not stale:
                    self._load_state = LoadState.LOAD_FAILED
                    self._error = LOAD_ERROR_MESSAGE
                    if not self.keep_snapshot_on_error:
                        self._groups = ()

                    self._in_flight = None

                snapshot = self._snapshot()

            if stale:
                logger.debug(f"Superseded load {sequence} failed: {error}")
            else:
                logger.error(f"Error while loading studies from Orthanc: {error}", exc_info=True)

            return snapshot

        with self._lock:
            if sequence != self._sequence:
                logger.debug(f"Discarding the result of superseded load {sequence}.")
                return self._snapshot()

            self._load_state = LoadState.LOADED
            self._groups = tuple(groups)
            self._in_flight = None
            return self._snapshot()
