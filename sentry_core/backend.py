"""
sentry_core.backend
~~~~~~~~~~~~~~~~~~~

:copyright: (c) 2010-2018 by the Sentry Team, see AUTHORS for more details.
:license: BSD, see LICENSE for more details.
"""
import logging
import sys

from sentry_core.buffer import RequestBuffer
from sentry_core.conf import defaults
from sentry_core.response import Response, Status
from sentry_core.utils import import_string
from sentry_core.utils.encoding import to_unicode
from sentry_core.utils.stacks import (
    get_stack_info, iter_stack_frames, iter_traceback_frames)

__all__ = ('Backend', 'PythonBackend')


class Backend(object):
    """
    Platform specific half of the client.

    A backend builds events from raw input and hands them to a transport.
    The client calls into it for every capture; it never calls the client
    back except through integrations.

    You must implement ``event_from_exception``, ``event_from_message``
    and ``send_event``.
    """

    def __init__(self, client, options):
        self.client = client
        self.options = options
        self.logger = logging.getLogger('sentry_core')
        self._buffer = RequestBuffer(
            limit=int(options.get('buffer_size') or defaults.BUFFER_SIZE))

    def install(self):
        return True

    async def event_from_exception(self, exception, hint=None):
        raise NotImplementedError

    async def event_from_message(self, message, level=None, hint=None):
        raise NotImplementedError

    async def send_event(self, event):
        raise NotImplementedError

    def store_breadcrumb(self, breadcrumb):
        """
        Return ``False`` to keep the client from merging ``breadcrumb``
        into the scope.
        """
        return True

    def store_scope(self, scope):
        pass

    def get_buffer(self):
        return self._buffer

    async def close(self):
        pass


def _exc_info_from(exception):
    if exception is None or exception is True:
        exc_info = sys.exc_info()
    elif isinstance(exception, tuple):
        exc_info = exception
    elif isinstance(exception, BaseException):
        exc_info = (type(exception), exception, exception.__traceback__)
    else:
        exc_info = None
    if not exc_info or exc_info[0] is None:
        return None
    return exc_info


def _walk_exception_chain(exc_info):
    """
    Yields ``exc_info`` tuples starting at the outermost exception and
    following ``__cause__``/``__context__`` inwards.
    """
    exc_type, exc_value, tb = exc_info
    seen = set()
    while exc_type is not None and id(exc_value) not in seen:
        yield exc_type, exc_value, tb
        seen.add(id(exc_value))
        if exc_value is None:
            break
        if exc_value.__cause__ is not None:
            cause = exc_value.__cause__
        elif exc_value.__context__ is not None and not exc_value.__suppress_context__:
            cause = exc_value.__context__
        else:
            break
        exc_type, exc_value, tb = type(cause), cause, cause.__traceback__


class PythonBackend(Backend):
    """
    Builds events from Python exceptions and tracebacks and delivers them
    through the configured transport.
    """

    def __init__(self, client, options):
        super().__init__(client, options)
        self._transport = None

    @property
    def transport(self):
        if self._transport is None:
            dsn = self.client.get_dsn()
            if dsn is None:
                return None
            transport_cls = self.options.get('transport') or defaults.TRANSPORT
            if isinstance(transport_cls, str):
                transport_cls = import_string(transport_cls)
            self._transport = transport_cls(
                dsn, **(self.options.get('transport_options') or {}))
        return self._transport

    def exception_values(self, exc_info):
        values = []
        for exc_type, exc_value, tb in _walk_exception_chain(exc_info):
            exc_module = getattr(exc_type, '__module__', None)
            if exc_module:
                exc_module = str(exc_module)
            values.append({
                'type': str(getattr(exc_type, '__name__', '<unknown>')),
                'value': to_unicode(exc_value) if exc_value is not None else '',
                'module': exc_module,
                'stacktrace': {
                    'frames': get_stack_info(iter_traceback_frames(tb)),
                },
            })
        return values

    async def event_from_exception(self, exception, hint=None):
        exc_info = _exc_info_from(exception)
        if exc_info is None:
            if exception is None or exception is True or isinstance(exception, tuple):
                message = 'captureException called without an exception being handled'
            else:
                message = 'Non-exception captured: %s' % to_unicode(exception)
            return await self.event_from_message(message, level='error', hint=hint)

        try:
            return {
                'level': 'error',
                'exception': {
                    'values': self.exception_values(exc_info),
                },
            }
        finally:
            del exc_info

    async def event_from_message(self, message, level=None, hint=None):
        event = {
            'message': to_unicode(message),
            'level': level or 'info',
        }
        if self.options.get('attach_stacktrace', defaults.ATTACH_STACKTRACE):
            event['stacktrace'] = {
                'frames': get_stack_info(iter_stack_frames()),
            }
        return event

    async def send_event(self, event):
        transport = self.transport
        if transport is None:
            self.logger.debug('No DSN configured, discarding event %s', event.get('event_id'))
            return Response(Status.SKIPPED, event=event, reason='No DSN configured')
        return await transport.send_event(event)

    async def close(self):
        if self._transport is not None:
            await self._transport.close()
