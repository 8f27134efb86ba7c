"""
sentry_core.scope
~~~~~~~~~~~~~~~~~

:copyright: (c) 2010-2018 by the Sentry Team, see AUTHORS for more details.
:license: BSD, see LICENSE for more details.
"""
import copy
import logging
import threading

from sentry_core.breadcrumbs import BreadcrumbBuffer
from sentry_core.utils import copy_containers, merge_dicts

logger = logging.getLogger('sentry.errors')


class Scope(object):
    """
    Stores context until cleared.

    Whatever is on the scope when an event is captured gets copied into
    that event; changing the scope afterwards does not touch events which
    were already captured.

    >>> scope = Scope()
    >>> scope.set_tag('key', 'value')
    >>> scope.set_user({'email': 'foo@example.com'})
    """

    def __init__(self):
        self._lock = threading.RLock()
        self._listeners = []
        self.tags = {}
        self.extra = {}
        self.user = {}
        self.level = None
        self.fingerprint = None
        self.breadcrumbs = BreadcrumbBuffer()

    def __repr__(self):
        return '<%s: tags=%r extra=%r user=%r breadcrumbs=%d>' % (
            type(self).__name__, self.tags, self.extra, self.user,
            len(self.breadcrumbs))

    def add_scope_listener(self, callback):
        self._listeners.append(callback)

    def _notify_listeners(self):
        for callback in self._listeners:
            try:
                callback(self)
            except Exception:
                logger.exception('Failed to notify scope listener %r', callback)

    def set_tag(self, key, value):
        with self._lock:
            self.tags[key] = value
        self._notify_listeners()

    def set_tags(self, tags):
        with self._lock:
            self.tags.update(tags)
        self._notify_listeners()

    def set_extra(self, key, value):
        with self._lock:
            self.extra[key] = value
        self._notify_listeners()

    def set_extras(self, extra):
        with self._lock:
            self.extra.update(extra)
        self._notify_listeners()

    def set_user(self, user):
        with self._lock:
            self.user = dict(user or {})
        self._notify_listeners()

    def set_level(self, level):
        with self._lock:
            self.level = level
        self._notify_listeners()

    def set_fingerprint(self, fingerprint):
        with self._lock:
            self.fingerprint = list(fingerprint) if fingerprint is not None else None
        self._notify_listeners()

    def add_breadcrumb(self, breadcrumb, max_breadcrumbs=None):
        with self._lock:
            self.breadcrumbs.record(breadcrumb, max_breadcrumbs)
        self._notify_listeners()

    def clear(self):
        with self._lock:
            self.tags = {}
            self.extra = {}
            self.user = {}
            self.level = None
            self.fingerprint = None
            self.breadcrumbs.clear()
        self._notify_listeners()

    def clone(self):
        new = type(self)()
        with self._lock:
            new.tags = dict(self.tags)
            new.extra = dict(self.extra)
            new.user = dict(self.user)
            new.level = self.level
            new.fingerprint = copy.copy(self.fingerprint)
            new.breadcrumbs.limit = self.breadcrumbs.limit
            new.breadcrumbs.buffer = list(self.breadcrumbs.buffer)
            new._listeners = list(self._listeners)
        return new

    def apply_to_event(self, event, max_breadcrumbs=None):
        """
        Returns a copy of ``event`` with the scope merged in.

        Values set on the event win over tags, extra and user data of the
        scope. The scope's level overrides the event's. Breadcrumbs are only
        attached when the event does not carry any of its own.
        """
        with self._lock:
            event = dict(event)

            if self.tags:
                event['tags'] = merge_dicts(self.tags, event.get('tags'))
            if self.extra:
                event['extra'] = merge_dicts(self.extra, event.get('extra'))
            if self.user:
                event['user'] = merge_dicts(self.user, event.get('user'))
            if self.level:
                event['level'] = self.level
            if self.fingerprint and event.get('fingerprint') is None:
                event['fingerprint'] = list(self.fingerprint)
            if not event.get('breadcrumbs') and len(self.breadcrumbs):
                event['breadcrumbs'] = self.breadcrumbs.get_buffer(max_breadcrumbs)

            return copy_containers(event)
