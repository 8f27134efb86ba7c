"""
sentry_core.response
~~~~~~~~~~~~~~~~~~~~

:copyright: (c) 2010-2018 by the Sentry Team, see AUTHORS for more details.
:license: BSD, see LICENSE for more details.
"""


class Status(object):
    UNKNOWN = 'unknown'
    SKIPPED = 'skipped'
    SUCCESS = 'success'
    RATE_LIMIT = 'rate_limit'
    INVALID = 'invalid'
    FAILED = 'failed'

    @classmethod
    def from_http_code(cls, code):
        if 200 <= code < 300:
            return cls.SUCCESS
        if code == 429:
            return cls.RATE_LIMIT
        if 400 <= code < 500:
            return cls.INVALID
        if code >= 500:
            return cls.FAILED
        return cls.UNKNOWN


class Response(object):
    """
    The outcome of a capture call.

    A dropped event (sampling, ``before_send`` or the inbound filters)
    resolves with ``Status.SKIPPED`` and a ``reason``; it is never raised.
    """

    def __init__(self, status, event=None, reason=None):
        self.status = status
        self.event = event
        self.reason = reason

    @property
    def event_id(self):
        if self.event is None:
            return None
        return self.event.get('event_id')

    def was_sent(self):
        return self.status == Status.SUCCESS

    def __repr__(self):
        return '<%s: status=%s event_id=%s>' % (
            type(self).__name__, self.status, self.event_id)
