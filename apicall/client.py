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

"""Dispatches calls and delivers their results.

A :class:`Client` turns a :class:`~apicall.call.Call` into exactly one
:class:`~apicall.result.Result`. The same pipeline backs both entry points:

* :meth:`Client.start` takes a completion callback, which is invoked on the
  client's callback executor::

      api = client.Client.shared()
      api.start(GetUser("42"), "https://api.example.com", on_complete=show)

* :meth:`Client.fetch` is awaitable from any event loop::

      result = await api.fetch(GetUser("42"), "https://api.example.com")
      user = result.unwrap()

A 401 response makes the client call the descriptor's
:meth:`~apicall.call.Call.refresh_credential` and send a freshly built
request once more. Each logical call has its own refresh budget of one.
"""

import asyncio
import concurrent.futures
import inspect
import logging
import threading

from apicall import _helpers
from apicall import _worker
from apicall import environment_vars
from apicall import exceptions
from apicall import request as request_builder
from apicall import response as response_classifier
from apicall.call import GENERIC_ERROR_MESSAGE
from apicall.result import Result
from apicall.transport import DEFAULT_MAX_REFRESH_ATTEMPTS
from apicall.transport import DEFAULT_TIMEOUT

try:
    from apicall.transport import aiohttp as aiohttp_transport

    AIOHTTP_INSTALLED = True
except ImportError:  # pragma: NO COVER
    AIOHTTP_INSTALLED = False

_LOGGER = logging.getLogger(__name__)

_CALLBACK_THREAD_PREFIX = "apicall-callback"


class Client:
    """Executes call descriptors against HTTP endpoints.

    The client owns one transport, shared by every in-flight call, and one
    background event loop that all calls run on. Results of :meth:`start`
    are delivered on one fixed callback executor, so callbacks never run
    concurrently with each other.

    Args:
        transport (apicall.transport.Request): (Optional) The transport
            adapter used to send requests. If not passed, an instance of
            :class:`apicall.transport.aiohttp.Request` is created.
        callback_executor (concurrent.futures.Executor): (Optional) Where
            completion callbacks run. Defaults to a single worker thread
            owned by the client.
        timeout (Optional[float]): The per-request timeout passed to the
            transport. Defaults to ``APICALL_TRANSPORT_TIMEOUT`` or 180s.
        log_bodies (Optional[bool]): Whether DEBUG request and response
            records include (hashed) bodies. Defaults to
            ``APICALL_LOG_BODIES``.

    Raises:
        ValueError: If `transport` is `None` and the external package
            `aiohttp` is not installed, or if the environment holds an
            invalid setting.
    """

    _shared = None
    _shared_lock = threading.Lock()

    def __init__(
        self, transport=None, callback_executor=None, timeout=None, log_bodies=None
    ):
        self._transport = transport or (
            AIOHTTP_INSTALLED and aiohttp_transport.Request()
        )
        if not self._transport:
            raise ValueError(
                "`transport` must either be configured or the external package `aiohttp` must be installed to use the default value."
            )

        if timeout is None:
            timeout = _helpers.get_float_from_env(
                environment_vars.APICALL_TRANSPORT_TIMEOUT, DEFAULT_TIMEOUT
            )
        self._timeout = timeout

        if log_bodies is None:
            log_bodies = _helpers.get_bool_from_env(environment_vars.APICALL_LOG_BODIES)
        self._log_bodies = log_bodies

        self._owns_callback_executor = callback_executor is None
        self._callback_executor = callback_executor or concurrent.futures.ThreadPoolExecutor(
            max_workers=1, thread_name_prefix=_CALLBACK_THREAD_PREFIX
        )
        self._worker = _worker.LoopThread()

    @classmethod
    def shared(cls):
        """Returns the process-wide client, creating it on first use."""
        with cls._shared_lock:
            if cls._shared is None:
                cls._shared = cls()
            return cls._shared

    @property
    def transport(self):
        """apicall.transport.Request: The shared transport adapter."""
        return self._transport

    def start(self, call, base_url, on_complete=None):
        """Starts a logical call.

        Args:
            call (apicall.call.Call): The call descriptor.
            base_url (str): The address ``call.path`` is relative to.
            on_complete (Optional[Callable[[Result], None]]): Invoked with
                the result on the callback executor.

        Returns:
            concurrent.futures.Future: Resolves to the same
            :class:`~apicall.result.Result` after ``on_complete`` returned.

        Raises:
            apicall.exceptions.ApiCallError: If the client has been closed.
        """
        delivered = concurrent.futures.Future()

        def _deliver(result):
            try:
                if on_complete is not None:
                    on_complete(result)
            except Exception:
                _LOGGER.exception(
                    "Completion callback of %s raised.", type(call).__name__
                )
            finally:
                delivered.set_result(result)

        def _on_done(future):
            self._callback_executor.submit(_deliver, _result_of(future))

        self._worker.submit(self._execute, call, base_url).add_done_callback(_on_done)
        return delivered

    async def fetch(self, call, base_url):
        """Runs a logical call and waits for its result.

        Args:
            call (apicall.call.Call): The call descriptor.
            base_url (str): The address ``call.path`` is relative to.

        Returns:
            apicall.result.Result: The result of the call.

        Raises:
            apicall.exceptions.ApiCallError: If the client has been closed.
        """
        if self._worker.is_current():
            return await self._execute(call, base_url)
        return await asyncio.wrap_future(
            self._worker.submit(self._execute, call, base_url)
        )

    async def _execute(self, call, base_url):
        """Builds, sends and classifies until the call has a result.

        The loop runs at most ``1 + DEFAULT_MAX_REFRESH_ATTEMPTS`` times. The
        refresh counter is local to this invocation.
        """
        name = type(call).__name__

        if call.offline_data is not None:
            _LOGGER.debug("Using offline data for %s.", name)
            return self._decode(call, call.offline_data)

        refresh_attempts = 0
        while True:
            try:
                built = request_builder.build(base_url, call)
            except (exceptions.InvalidURLError, exceptions.EncodeError) as caught_exc:
                _LOGGER.debug("Could not build request for %s: %s", name, caught_exc)
                return Result.failure(caught_exc)

            try:
                raw = await self._send(built)
            except exceptions.TransportError as caught_exc:
                _LOGGER.debug("Request for %s failed: %s", name, caught_exc)
                return Result.failure(caught_exc)

            can_refresh = (
                not call.is_refresh_call
                and refresh_attempts < DEFAULT_MAX_REFRESH_ATTEMPTS
            )
            classified = response_classifier.classify(raw, can_refresh)

            if classified.ok:
                return self._decode(call, classified.data)

            if (
                classified.outcome
                is response_classifier.Outcome.REFRESHABLE_AUTH_FAILURE
            ):
                refresh_attempts += 1
                _LOGGER.info(
                    "Refreshing credentials due to a %s response. Attempt %s/%s.",
                    classified.status,
                    refresh_attempts,
                    DEFAULT_MAX_REFRESH_ATTEMPTS,
                )
                try:
                    await self._refresh(call)
                except Exception as caught_exc:
                    _LOGGER.warning(
                        "Credential refresh for %s failed: %s", name, caught_exc
                    )
                    return self._server_error(call, classified, cause=caught_exc)
                continue

            return self._server_error(call, classified)

    async def _send(self, built):
        _helpers.request_log(
            _LOGGER, built.method, built.url, built.body, built.headers, self._log_bodies
        )
        raw = await self._transport(
            built.url,
            method=built.method,
            body=built.body,
            headers=built.headers,
            timeout=self._timeout,
        )
        _helpers.response_log(_LOGGER, raw.status, raw.data, self._log_bodies)
        return raw

    async def _refresh(self, call):
        if inspect.iscoroutinefunction(call.refresh_credential):
            await call.refresh_credential(self)
        else:
            loop = asyncio.get_running_loop()
            await loop.run_in_executor(None, call.refresh_credential, self)

    @staticmethod
    def _decode(call, data):
        try:
            return Result.success(call.decode_success(data))
        except exceptions.DecodeError as caught_exc:
            return Result.failure(caught_exc)
        except (ValueError, TypeError, KeyError) as caught_exc:
            new_exc = exceptions.DecodeError(caught_exc)
            new_exc.__cause__ = caught_exc
            return Result.failure(new_exc)

    @staticmethod
    def _server_error(call, classified, cause=None):
        try:
            message = call.decode_error_message(classified.data)
        except Exception:
            _LOGGER.exception(
                "Could not extract the error message of a %s response.",
                classified.status,
            )
            message = GENERIC_ERROR_MESSAGE
        error = exceptions.ServerError(classified.status, message, classified.data)
        error.__cause__ = cause
        return Result.failure(error)

    def close(self):
        """Closes the transport and stops the dispatcher thread.

        Calls still in flight fail with a transport error or are abandoned.
        """
        try:
            if self._worker.is_running():
                self._worker.submit(self._transport.close).result(
                    _worker.WORKER_JOIN_TIMEOUT_SECONDS
                )
        finally:
            self._worker.stop()
            if self._owns_callback_executor:
                self._callback_executor.shutdown(wait=False)
            with Client._shared_lock:
                if Client._shared is self:
                    Client._shared = None

    def __enter__(self):
        return self

    def __exit__(self, exc_type, exc_value, traceback):
        self.close()

    async def __aenter__(self):
        return self

    async def __aexit__(self, exc_type, exc_value, traceback):
        await asyncio.get_running_loop().run_in_executor(None, self.close)


def _result_of(future):
    """Converts a finished pipeline future into a result."""
    if future.cancelled():
        return Result.failure(exceptions.TransportError("The call was cancelled."))
    caught_exc = future.exception()
    if caught_exc is not None:
        _LOGGER.error("Call failed unexpectedly: %r", caught_exc)
        return Result.failure(caught_exc)
    return future.result()
