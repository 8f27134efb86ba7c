"""
sentry_core
~~~~~~~~~~~

:copyright: (c) 2010-2018 by the Sentry Team, see AUTHORS for more details.
:license: BSD, see LICENSE for more details.
"""
__all__ = ('VERSION', 'Client', 'Scope', 'Response', 'Status')

try:
    from importlib.metadata import version as _get_version
    VERSION = _get_version('sentry-core')
except Exception:
    VERSION = 'unknown'

from sentry_core.base import *  # NOQA
from sentry_core.response import Response, Status  # NOQA
from sentry_core.scope import Scope  # NOQA
