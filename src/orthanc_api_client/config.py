"""
This module stores the configuration used to connect to an Orthanc archive.
"""

import os
from dataclasses import dataclass

DEFAULT_URL         = 'http://localhost:8042'
DEFAULT_USERNAME    = 'orthanc'
DEFAULT_PASSWORD    = 'orthanc'
DEFAULT_TIMEOUT     = 10.0
DEFAULT_MAX_WORKERS = 8


@dataclass(frozen=True)
class ArchiveConfig:
    """
    Class wrapping the Orthanc archive access configuration. It is read-only once created and
    shared by every component that talks to the archive.
    """

    url:         str
    username:    str | None = None
    password:    str | None = None
    timeout:     float      = DEFAULT_TIMEOUT      # Seconds, for each individual request.
    max_workers: int        = DEFAULT_MAX_WORKERS  # Concurrent requests per fan-out level.

    def __post_init__(self):
        if self.timeout <= 0:
            raise ValueError(f"The archive timeout must be positive, got {self.timeout}.")

        if self.max_workers < 1:
            raise ValueError(f"The archive maximum number of workers must be at least 1, got {self.max_workers}.")

        # Route paths are always joined with a slash.
        object.__setattr__(self, 'url', self.url.rstrip('/'))


def get_archive_config() -> ArchiveConfig:
    """
    Read the archive configuration from the environment, using the default local Orthanc
    configuration for the missing variables.
    """

    return ArchiveConfig(
        url         = os.getenv('ORTHANC_URL', DEFAULT_URL),
        username    = os.getenv('ORTHANC_USERNAME', DEFAULT_USERNAME),
        password    = os.getenv('ORTHANC_PASSWORD', DEFAULT_PASSWORD),
        timeout     = float(os.getenv('ORTHANC_TIMEOUT', str(DEFAULT_TIMEOUT))),
        max_workers = int(os.getenv('ORTHANC_MAX_WORKERS', str(DEFAULT_MAX_WORKERS))),
    )
