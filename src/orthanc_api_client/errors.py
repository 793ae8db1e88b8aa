class ArchiveError(Exception):
    """
    Base exception raised when a request to the Orthanc archive does not succeed.
    """

    message: str
    route: str
    status_code: int | None

    def __init__(self, message: str, route: str, status_code: int | None = None):
        super().__init__(message)
        self.message = message
        self.route = route
        self.status_code = status_code


class TransportError(ArchiveError):
    """
    Exception raised if a request fails because of the network, a timeout, or an HTTP error status
    other than not found. Such a failure may be transient.
    """


class NotFoundError(ArchiveError):
    """
    Exception raised if the archive answers that the requested resource does not exist.
    """


class UploadError(TransportError):
    """
    Exception raised if the archive answers an upload with a non-success HTTP status.
    """
