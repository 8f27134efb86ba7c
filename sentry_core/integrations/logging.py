"""
sentry_core.integrations.logging
~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~

:copyright: (c) 2010-2018 by the Sentry Team, see AUTHORS for more details.
:license: BSD, see LICENSE for more details.
"""
import logging
import sys
import threading
import traceback

from sentry_core.conf import SDK_LOGGERS
from sentry_core.integrations import Integration

__all__ = ('LoggingIntegration', 'BreadcrumbHandler', 'ignore_logger')

RESERVED = frozenset((
    'stack', 'name', 'module', 'funcName', 'args', 'msg', 'levelno',
    'exc_text', 'exc_info', 'data', 'created', 'levelname', 'msecs',
    'relativeCreated', 'tags', 'message', 'pathname', 'filename', 'lineno',
    'thread', 'threadName', 'process', 'processName', 'stack_info',
    'taskName',
))

_ignored_loggers = set(SDK_LOGGERS)


def ignore_logger(name_or_logger):
    """Ignores a logger for the breadcrumb code.  This is useful
    for framework integration code where some log messages should be
    specially handled.
    """
    if isinstance(name_or_logger, str):
        name = name_or_logger
    else:
        name = name_or_logger.name
    _ignored_loggers.add(name)


def _is_ignored(name):
    return any(name == ignored or name.startswith(ignored + '.')
               for ignored in _ignored_loggers)


class BreadcrumbHandler(logging.Handler, object):
    """
    Records every log record it sees as a breadcrumb on the bound client.
    """

    def __init__(self, integration, level=logging.NOTSET):
        self.integration = integration
        logging.Handler.__init__(self, level=level)

    def emit(self, record):
        try:
            # Avoid typical config issues by overriding loggers behavior
            if _is_ignored(record.name):
                return
            client = self.integration.client
            if client is None:
                return
            client.addBreadcrumb(self._breadcrumb_from_record(record),
                                 hint={'log_record': record})
        except Exception:
            print("Top level Sentry exception caught - failed recording breadcrumb",
                  file=sys.stderr)
            print(traceback.format_exc(), file=sys.stderr)

    def _breadcrumb_from_record(self, record):
        # If people log bad things, this can happen.  Then just use the
        # raw message.
        try:
            message = record.getMessage()
        except Exception:
            message = str(record.msg)

        data = {}
        for k, v in vars(record).items():
            if k in RESERVED or k.startswith('_'):
                continue
            data[k] = v

        return {
            'type': 'default',
            'timestamp': record.created,
            'message': message,
            'category': record.name,
            'level': logging.getLevelName(record.levelno).lower(),
            'data': data,
        }


class LoggingIntegration(Integration):
    """
    Turns stdlib log records at or above ``level`` into breadcrumbs.
    """

    name = 'Logging'

    def __init__(self, level=logging.INFO, logger=None):
        self.level = level
        self.logger = logger
        self.handler = None
        self._lock = threading.Lock()

    def install(self, options=None):
        with self._lock:
            if self.handler is not None:
                return False
            self.handler = BreadcrumbHandler(self, level=self.level)
            target = self.logger or logging.getLogger()
            target.addHandler(self.handler)
        return True

    def uninstall(self):
        with self._lock:
            if self.handler is None:
                return
            (self.logger or logging.getLogger()).removeHandler(self.handler)
            self.handler = None
