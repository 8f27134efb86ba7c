"""
sentry_core.conf.defaults
~~~~~~~~~~~~~~~~~~~~~~~~~

Represents the default values for all client options.

:copyright: (c) 2010-2018 by the Sentry Team, see AUTHORS for more details.
:license: BSD, see LICENSE for more details.
"""
import re
import socket

# Not all environments have access to socket module, for example Google App Engine
# Need to check to see if the socket module has ``gethostname``, if it doesn't we
# will set it to None and require it passed in to ``Client`` on initializtion.
NAME = socket.gethostname() if hasattr(socket, 'gethostname') else None

ENABLED = True

DEBUG = False

# Fraction of events that get sent, from 0.0 to 1.0
SAMPLE_RATE = 1.0

# The maximum number of breadcrumbs kept on a scope and sent with an event.
MAX_BREADCRUMBS = 100

# ``max_breadcrumbs`` is clamped to this value.
MAX_BREADCRUMBS_LIMIT = 100

# The maximum length of an event message before it gets truncated.
MAX_VALUE_LENGTH = 250

# Attach the current stack to plain message events.
ATTACH_STACKTRACE = False

# Number of deliveries allowed to be in flight at once.
BUFFER_SIZE = 30

# Transport timeout, in seconds
TIMEOUT = 5

# Error messages that are never worth reporting. These are always merged
# ahead of the user supplied ``ignore_errors``.
IGNORE_ERRORS = (
    re.compile(r'(?:^|: )Script error\.?$'),
    re.compile(r'^Javascript error: Script error\.? on line 0$'),
)

# Default Transport
TRANSPORT = 'sentry_core.transport.aiohttp.AIOHTTPTransport'
