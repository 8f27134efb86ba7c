"""
sentry_core.transport.base
~~~~~~~~~~~~~~~~~~~~~~~~~~

:copyright: (c) 2010-2018 by the Sentry Team, see AUTHORS for more details.
:license: BSD, see LICENSE for more details.
"""
import time

import sentry_core
from sentry_core.dsn import PROTOCOL_VERSION
from sentry_core.utils import get_auth_header, json


class Transport(object):
    """
    All transport implementations need to subclass this class

    You must implement the ``send_event`` coroutine. It resolves with a
    :class:`sentry_core.response.Response` when the event was accepted and
    raises otherwise.
    """

    def __init__(self, dsn, **options):
        self.dsn = dsn
        self.options = options

    @property
    def client_string(self):
        return 'sentry-core-python/%s' % (sentry_core.VERSION,)

    def get_headers(self):
        auth_header = get_auth_header(
            protocol=PROTOCOL_VERSION,
            timestamp=time.time(),
            client=self.client_string,
            api_key=self.dsn.public_key,
            api_secret=self.dsn.secret_key,
        )
        return {
            'User-Agent': self.client_string,
            'X-Sentry-Auth': auth_header,
            'Content-Type': 'application/json',
        }

    def encode(self, event):
        """
        Serializes ``event`` into a raw string.
        """
        return json.dumps(event).encode('utf8')

    def decode(self, data):
        """
        Unserializes a string, ``data``.
        """
        return json.loads(data.decode('utf8'))

    async def send_event(self, event):
        """
        You need to override this to do something with the actual
        data. Usually - this is sending to a server
        """
        raise NotImplementedError

    async def close(self):
        pass
