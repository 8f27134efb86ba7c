"""
sentry_core.breadcrumbs
~~~~~~~~~~~~~~~~~~~~~~~

:copyright: (c) 2010-2018 by the Sentry Team, see AUTHORS for more details.
:license: BSD, see LICENSE for more details.
"""
import time

from sentry_core.conf import defaults


def make_breadcrumb(breadcrumb=None, **kwargs):
    """
    Returns a new breadcrumb dict with ``timestamp`` and ``type`` filled in.

    Values already present on ``breadcrumb`` win over the defaults.
    """
    crumb = {
        'timestamp': time.time(),
        'type': 'default',
    }
    if breadcrumb:
        crumb.update(breadcrumb)
    crumb.update(kwargs)
    if crumb.get('timestamp') is None:
        crumb['timestamp'] = time.time()
    return crumb


class BreadcrumbBuffer(object):
    """
    A chronological, bounded list of breadcrumbs. Once ``limit`` is
    reached the oldest breadcrumb is evicted first.
    """

    def __init__(self, limit=defaults.MAX_BREADCRUMBS):
        self.buffer = []
        self.limit = limit

    def __len__(self):
        return len(self.buffer)

    def __iter__(self):
        return iter(self.get_buffer())

    def record(self, breadcrumb, limit=None):
        if limit is None:
            limit = self.limit
        self.buffer.append(breadcrumb)
        if limit <= 0:
            del self.buffer[:]
        else:
            del self.buffer[:-limit]

    def clear(self):
        del self.buffer[:]

    def get_buffer(self, limit=None):
        if limit is None:
            return list(self.buffer)
        if limit <= 0:
            return []
        return self.buffer[-limit:]
