"""
sentry_core.transport.aiohttp
~~~~~~~~~~~~~~~~~~~~~~~~~~~~~

:copyright: (c) 2010-2018 by the Sentry Team, see AUTHORS for more details.
:license: BSD, see LICENSE for more details.
"""
import asyncio

import aiohttp
from aiohttp import ClientError

from sentry_core.conf import defaults
from sentry_core.exceptions import APIError, RateLimited
from sentry_core.response import Response, Status
from sentry_core.transport.base import Transport


class AIOHTTPTransport(Transport):

    def __init__(self, dsn, timeout=defaults.TIMEOUT, verify_ssl=True, **options):
        super().__init__(dsn, **options)
        if isinstance(timeout, str):
            timeout = float(timeout)
        if isinstance(verify_ssl, str):
            verify_ssl = bool(int(verify_ssl))
        self.timeout = timeout
        self.verify_ssl = verify_ssl
        self._session = None

    def get_session(self):
        if self._session is None or self._session.closed:
            self._session = aiohttp.ClientSession(
                timeout=aiohttp.ClientTimeout(total=self.timeout),
                connector=aiohttp.TCPConnector(ssl=None if self.verify_ssl else False),
            )
        return self._session

    async def send_event(self, event):
        url = self.dsn.store_url
        data = self.encode(event)
        try:
            async with self.get_session().post(
                    url, data=data, headers=self.get_headers()) as response:
                try:
                    response.raise_for_status()
                except ClientError as e:
                    msg = response.headers.get('x-sentry-error')
                    if response.status == 429:
                        try:
                            retry_after = int(response.headers.get('retry-after'))
                        except (ValueError, TypeError):
                            retry_after = 0
                        raise RateLimited(msg, retry_after) from e
                    raise APIError(msg, response.status) from e
                else:
                    return Response(Status.from_http_code(response.status), event=event)
        except asyncio.TimeoutError as e:
            message = ("Connection to Sentry server timed out "
                       "(url: %s, timeout: %s seconds)" % (url, self.timeout))
            raise APIError(message, 504) from e

    async def close(self):
        if self._session is not None and not self._session.closed:
            await self._session.close()
        self._session = None
