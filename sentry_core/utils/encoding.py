"""
sentry_core.utils.encoding
~~~~~~~~~~~~~~~~~~~~~~~~~~

:copyright: (c) 2010-2018 by the Sentry Team, see AUTHORS for more details.
:license: BSD, see LICENSE for more details.
"""


def to_unicode(value):
    if isinstance(value, bytes):
        return value.decode('utf-8', 'replace')
    try:
        value = str(value)
    except Exception:  # in some cases we get a different exception
        try:
            value = str(repr(type(value)))
        except Exception:
            value = '(Error decoding value)'
    return value


def truncate(value, max_length):
    if max_length is None or max_length <= 0:
        return value
    if not isinstance(value, str) or len(value) <= max_length:
        return value
    return value[:max_length] + '...'
