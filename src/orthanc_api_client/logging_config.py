"""Logging configuration for the scripts using the archive client."""

import logging
import logging.config
import os

_CONFIGURED = False


def configure_logging(default_level: str | None = None) -> None:
    """Ensure the script logs to stdout with a consistent formatter, once per process."""

    global _CONFIGURED
    if _CONFIGURED:
        return

    level_name = (default_level or os.getenv('LOG_LEVEL', 'WARNING')).upper()

    logging.config.dictConfig(
        {
            'version': 1,
            'disable_existing_loggers': False,
            'formatters': {
                'standard': {
                    'format': '%(asctime)s %(levelname)s [%(name)s] %(message)s',
                    'datefmt': '%Y-%m-%d %H:%M:%S',
                }
            },
            'handlers': {
                'stdout': {
                    'class': 'logging.StreamHandler',
                    'formatter': 'standard',
                    'stream': 'ext://sys.stdout',
                }
            },
            'root': {
                'level': level_name,
                'handlers': ['stdout'],
            },
            'loggers': {
                # Connection pool messages duplicate the client request lines.
                'urllib3': {
                    'level': 'WARNING',
                },
            },
        }
    )

    _CONFIGURED = True
