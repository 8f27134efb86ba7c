"""
sentry_core.buffer
~~~~~~~~~~~~~~~~~~

:copyright: (c) 2010-2018 by the Sentry Team, see AUTHORS for more details.
:license: BSD, see LICENSE for more details.
"""
import asyncio
import collections
import logging
from functools import partial

from sentry_core.conf import defaults

logger = logging.getLogger('sentry_core')


class BufferEntry(object):
    __slots__ = ('task', 'future', 'running')

    def __init__(self, task, future):
        self.task = task
        self.future = future
        self.running = None


class RequestBuffer(object):
    """
    Keeps track of deliveries which are in flight.

    At most ``limit`` deliveries run at the same time. Anything added
    beyond that waits in line and is started, oldest first, as soon as a
    running delivery settles.

    >>> buffer = RequestBuffer(limit=10)
    >>> response = await buffer.add(transport.send_event(event))
    >>> await buffer.drain(timeout=2)
    """

    def __init__(self, limit=defaults.BUFFER_SIZE):
        if limit < 1:
            raise ValueError('RequestBuffer limit must be at least 1, got %r' % (limit,))
        self.limit = limit
        self._running = set()
        self._pending = collections.deque()
        self._waiters = []

    def __len__(self):
        return len(self._running) + len(self._pending)

    def __repr__(self):
        return '<%s: running=%d pending=%d limit=%d>' % (
            type(self).__name__, len(self._running), len(self._pending),
            self.limit)

    def length(self):
        return len(self)

    def running(self):
        return len(self._running)

    def is_empty(self):
        return not len(self)

    def add(self, task):
        """
        Queues ``task`` for execution and returns a future which resolves
        with its result.

        ``task`` is an awaitable or a callable returning one; callables are
        only invoked once the task is admitted.
        """
        loop = asyncio.get_running_loop()
        entry = BufferEntry(task, loop.create_future())
        self._pending.append(entry)
        self._dispatch()
        return entry.future

    def _dispatch(self):
        while self._pending and len(self._running) < self.limit:
            entry = self._pending.popleft()
            self._start(entry)

    def _start(self, entry):
        task = entry.task
        entry.task = None
        try:
            if callable(task):
                task = task()
            entry.running = asyncio.ensure_future(task)
        except Exception as e:
            # The task could not even be started; it settles right away.
            logger.debug('Failed to start buffered task', exc_info=True)
            if not entry.future.done():
                entry.future.set_exception(e)
            return
        self._running.add(entry)
        entry.running.add_done_callback(partial(self._settle, entry))

    def _settle(self, entry, task):
        self._running.discard(entry)
        future = entry.future
        if not future.done():
            if task.cancelled():
                future.cancel()
            elif task.exception() is not None:
                future.set_exception(task.exception())
            else:
                future.set_result(task.result())
        self._dispatch()
        if not len(self):
            self._wake_waiters()

    def _wake_waiters(self):
        waiters, self._waiters = self._waiters, []
        for waiter in waiters:
            if not waiter.done():
                waiter.set_result(True)

    async def drain(self, timeout=None):
        """
        Waits until every tracked delivery settled.

        Returns ``True`` once the buffer is empty, or ``False`` if
        ``timeout`` (in seconds) passed first. Deliveries still running
        at the deadline are left alone.
        """
        if not len(self):
            return True
        if timeout is not None and timeout <= 0:
            return False

        waiter = asyncio.get_running_loop().create_future()
        self._waiters.append(waiter)
        try:
            await asyncio.wait_for(asyncio.shield(waiter), timeout)
        except asyncio.TimeoutError:
            return False
        finally:
            if waiter in self._waiters:
                self._waiters.remove(waiter)
        return True
