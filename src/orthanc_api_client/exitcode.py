"""Exit codes of the archive scripts."""


# -- Input errors (exit codes from 1 to 19)
INVALID_PATH = 5  # if path to file or folder does not exist
INVALID_ARG  = 6  # if one of the program argument is invalid

# -- Archive failures (exit codes from 80 to 99)
ARCHIVE_UNAVAILABLE = 80  # if the archive liveness probe failed
TRANSPORT_FAILURE   = 81  # if a request failed because of the network or the archive
NOT_FOUND           = 82  # if a requested resource does not exist in the archive
UPLOAD_FAILURE      = 83  # if the archive rejected an upload
LOAD_FAILURE        = 84  # if the studies of the archive could not be loaded
