"""
sentry_core.integrations.inboundfilters
~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~

Drops events which match ``ignore_errors``, come from a blacklisted
location, or do not come from a whitelisted one.

:copyright: (c) 2010-2018 by the Sentry Team, see AUTHORS for more details.
:license: BSD, see LICENSE for more details.
"""
import collections
import logging
import re
import threading

from sentry_core.conf import defaults
from sentry_core.integrations import Integration

__all__ = (
    'Literal', 'Pattern', 'FilterConfig', 'InboundFilters', 'make_matcher',
    'get_possible_event_messages', 'get_event_filter_url',
    'is_ignored_error', 'is_blacklisted_url', 'is_whitelisted_url',
    'should_drop_event',
)

logger = logging.getLogger('sentry_core')


class Literal(collections.namedtuple('Literal', ['text'])):
    """Matches any value containing ``text``."""
    __slots__ = ()

    def matches(self, value):
        return self.text in value


class Pattern(collections.namedtuple('Pattern', ['regex'])):
    """Matches any value the regular expression finds a match in."""
    __slots__ = ()

    def matches(self, value):
        return self.regex.search(value) is not None


def make_matcher(value):
    if isinstance(value, (Literal, Pattern)):
        return value
    if isinstance(value, str):
        return Literal(value)
    if isinstance(value, re.Pattern):
        return Pattern(value)
    raise TypeError('Expected a string or a compiled regular expression, got %r' % (value,))


class FilterConfig(collections.namedtuple(
        'FilterConfig', ['ignore_errors', 'blacklist_urls', 'whitelist_urls'])):
    __slots__ = ()

    @classmethod
    def build(cls, ignore_errors=(), blacklist_urls=(), whitelist_urls=(),
              default_ignore_errors=defaults.IGNORE_ERRORS):
        return cls(
            ignore_errors=tuple(make_matcher(p) for p in
                                list(default_ignore_errors or ()) + list(ignore_errors or ())),
            blacklist_urls=tuple(make_matcher(p) for p in blacklist_urls or ()),
            whitelist_urls=tuple(make_matcher(p) for p in whitelist_urls or ()),
        )


EMPTY_CONFIG = FilterConfig((), (), ())


def _matches_any(value, matchers):
    if not isinstance(value, str):
        return False
    return any(matcher.matches(value) for matcher in matchers)


def get_possible_event_messages(event):
    try:
        message = event.get('message')
        if message:
            return [message] if isinstance(message, str) else []

        values = (event.get('exception') or {}).get('values') or []
        if values:
            first = values[0] or {}
            return ['%s: %s' % (first.get('type') or '', first.get('value') or '')]
    except (AttributeError, IndexError, KeyError, TypeError):
        logger.debug('Cannot extract messages from malformed event')
    return []


def _last_frame_filename(stacktrace):
    frames = (stacktrace or {}).get('frames')
    if not frames:
        return None
    filename = (frames[-1] or {}).get('filename')
    return filename if isinstance(filename, str) and filename else None


def get_event_filter_url(event):
    """
    Returns the filename of the innermost frame, or ``None``.

    The top-level stacktrace is preferred; otherwise the stacktrace of the
    last exception value is used.
    """
    try:
        if event.get('stacktrace'):
            return _last_frame_filename(event['stacktrace'])
        values = (event.get('exception') or {}).get('values') or []
        if values:
            return _last_frame_filename((values[-1] or {}).get('stacktrace'))
    except (AttributeError, IndexError, KeyError, TypeError):
        logger.debug('Cannot extract url from malformed event')
    return None


def is_ignored_error(event, config):
    if not config.ignore_errors:
        return False
    return any(_matches_any(message, config.ignore_errors)
               for message in get_possible_event_messages(event))


def is_blacklisted_url(event, config):
    if not config.blacklist_urls:
        return False
    url = get_event_filter_url(event)
    if url is None:
        return False
    return _matches_any(url, config.blacklist_urls)


def is_whitelisted_url(event, config):
    if not config.whitelist_urls:
        return True
    url = get_event_filter_url(event)
    if url is None:
        return True
    return _matches_any(url, config.whitelist_urls)


def should_drop_event(event, config):
    return (
        is_ignored_error(event, config) or
        is_blacklisted_url(event, config) or
        not is_whitelisted_url(event, config)
    )


class InboundFilters(Integration):
    """
    Binds the filter predicates to a configuration which is frozen the
    first time :meth:`install` runs.

    >>> filters = InboundFilters()
    >>> filters.install({'ignore_errors': ['ConnectionResetError']})
    >>> filters.should_drop_event(event)
    """

    name = 'InboundFilters'

    def __init__(self, default_ignore_errors=defaults.IGNORE_ERRORS):
        self.default_ignore_errors = tuple(default_ignore_errors or ())
        self.config = EMPTY_CONFIG
        self._installed = False
        self._lock = threading.Lock()

    @property
    def installed(self):
        return self._installed

    def install(self, options=None):
        with self._lock:
            if self._installed:
                return False
            options = options or {}
            self.config = FilterConfig.build(
                ignore_errors=options.get('ignore_errors'),
                blacklist_urls=options.get('blacklist_urls'),
                whitelist_urls=options.get('whitelist_urls'),
                default_ignore_errors=self.default_ignore_errors,
            )
            self._installed = True
        return True

    def is_ignored_error(self, event):
        return is_ignored_error(event, self.config)

    def is_blacklisted_url(self, event):
        return is_blacklisted_url(event, self.config)

    def is_whitelisted_url(self, event):
        return is_whitelisted_url(event, self.config)

    def should_drop_event(self, event):
        return (
            self.is_ignored_error(event) or
            self.is_blacklisted_url(event) or
            not self.is_whitelisted_url(event)
        )
