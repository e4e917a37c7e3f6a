# Copyright 2026 Google LLC
#
# Licensed under the Apache License, Version 2.0 (the "License");
# you may not use this file except in compliance with the License.
# You may obtain a copy of the License at
#
#      http://www.apache.org/licenses/LICENSE-2.0
#
# Unless required by applicable law or agreed to in writing, software
# distributed under the License is distributed on an "AS IS" BASIS,
# WITHOUT WARRANTIES OR CONDITIONS OF ANY KIND, either express or implied.
# See the License for the specific language governing permissions and
# limitations under the License.

import asyncio
import logging
import threading

import apicall.exceptions as e

WORKER_JOIN_TIMEOUT_SECONDS = 5

_LOGGER = logging.getLogger(__name__)


class LoopThread:
    """
    Organizes exactly one background thread running an asyncio event loop.

    Coroutines submitted from any thread run on that loop, so objects bound
    to it, such as an HTTP session, are only ever used from one loop.
    """

    def __init__(self, name="apicall-dispatcher"):
        """Initializes the worker.

        Args:
            name (str): The name of the worker thread.
        """
        self._name = name
        self._loop = None
        self._worker = None
        self._lock = threading.Lock()
        self._stopped = False

    def _need_worker(self):
        return self._worker is None or not self._worker.is_alive()

    def _spawn_worker(self):
        loop = asyncio.new_event_loop()
        self._worker = threading.Thread(
            target=self._run, args=(loop,), name=self._name, daemon=True
        )
        self._loop = loop
        self._worker.start()

    @staticmethod
    def _run(loop):
        asyncio.set_event_loop(loop)
        try:
            loop.run_forever()
        finally:
            loop.run_until_complete(loop.shutdown_asyncgens())
            loop.close()

    @property
    def loop(self):
        """asyncio.AbstractEventLoop: The worker's loop, started on demand.

        Raises:
            apicall.exceptions.ApiCallError: If the worker was stopped.
        """
        with self._lock:
            if self._stopped:
                raise e.ApiCallError("The dispatcher has been closed.")
            if self._need_worker():
                self._spawn_worker()
            return self._loop

    def is_running(self):
        """True if the worker thread has been started and is alive."""
        return not self._need_worker()

    def is_current(self):
        """True if called from a coroutine running on the worker's loop."""
        try:
            return asyncio.get_running_loop() is self._loop
        except RuntimeError:
            return False

    def submit(self, coro_fn, *args):
        """Schedules a coroutine on the worker's loop.

        Args:
            coro_fn: The coroutine function to run.
            args: The arguments passed to ``coro_fn``.

        Returns:
            concurrent.futures.Future: The future of the coroutine's result.
        """
        loop = self.loop
        return asyncio.run_coroutine_threadsafe(coro_fn(*args), loop)

    def stop(self):
        """Stops the loop and waits for the worker thread to exit."""
        with self._lock:
            self._stopped = True
            worker, loop = self._worker, self._loop
        if worker is None or not worker.is_alive():
            return
        loop.call_soon_threadsafe(loop.stop)
        if worker is not threading.current_thread():
            worker.join(WORKER_JOIN_TIMEOUT_SECONDS)
            if worker.is_alive():  # pragma: NO COVER
                _LOGGER.warning("Dispatcher thread %s did not stop.", self._name)
