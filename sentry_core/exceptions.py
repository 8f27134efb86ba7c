"""
sentry_core.exceptions
~~~~~~~~~~~~~~~~~~~~~~

:copyright: (c) 2010-2018 by the Sentry Team, see AUTHORS for more details.
:license: BSD, see LICENSE for more details.
"""


class SentryError(Exception):
    pass


class APIError(SentryError):
    def __init__(self, message, code=0):
        super().__init__(message, code)
        self.code = code
        self.message = message

    def __str__(self):
        return '%s: %s' % (self.message, self.code)


class RateLimited(APIError):
    def __init__(self, message, retry_after=0):
        self.retry_after = retry_after
        super().__init__(message, 429)


class InvalidDsn(ValueError):
    """
    Raised when a DSN cannot be parsed into a store endpoint.
    """
