"""
sentry_core.conf
~~~~~~~~~~~~~~~~

:copyright: (c) 2010-2018 by the Sentry Team, see AUTHORS for more details.
:license: BSD, see LICENSE for more details.
"""
import logging

__all__ = ('configure_logging', 'SDK_LOGGERS')

SDK_LOGGERS = (
    'sentry_core',
    'sentry.errors',
)


def configure_logging(debug=False, loggers=SDK_LOGGERS):
    """
    Makes sure the SDK's own loggers end up somewhere.

    A ``StreamHandler`` is attached to every SDK logger which has no
    handler yet. With ``debug`` the loggers are lowered to ``DEBUG``.

    >>> configure_logging(debug=True)
    """
    level = logging.DEBUG if debug else logging.INFO
    for name in loggers:
        logger = logging.getLogger(name)
        if debug:
            logger.setLevel(level)
        if logger.handlers:
            continue
        logger.addHandler(logging.StreamHandler())
        if not debug:
            logger.setLevel(level)
