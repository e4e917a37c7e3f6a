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

"""Transport adapter for AIOHTTP Requests."""

import asyncio
import logging

try:
    import aiohttp
except ImportError as caught_exc:  # pragma: NO COVER
    raise ImportError(
        "The aiohttp library is not installed, please install the aiohttp package to use the aiohttp transport."
    ) from caught_exc

from apicall import _helpers
from apicall import exceptions
from apicall import transport

_LOGGER = logging.getLogger(__name__)


class Request(transport.Request):
    """Asynchronous aiohttp request adapter.

    This is the default transport of :class:`~apicall.client.Client`. One
    instance holds one :class:`aiohttp.ClientSession`, whose connection pool
    is shared by every call sent through it.

    Args:
        session (aiohttp.ClientSession): An instance of
            :class:`aiohttp.ClientSession` used to make HTTP requests. If not
            specified, a session is created on first use, on the running
            event loop, and closed by :meth:`close`.

    .. automethod:: __call__
    """

    def __init__(self, session=None):
        self.session = session
        self._owns_session = session is None

    @_helpers.copy_docstring(transport.Request)
    async def __call__(
        self,
        url,
        method="GET",
        body=None,
        headers=None,
        timeout=transport.DEFAULT_TIMEOUT,
        **kwargs,
    ):
        if self.session is None:
            self.session = aiohttp.ClientSession()

        if timeout is not None:
            kwargs["timeout"] = aiohttp.ClientTimeout(total=timeout)

        try:
            _LOGGER.debug("Making request: %s %s", method, url)
            async with self.session.request(
                method,
                url,
                data=body,
                headers=headers,
                **kwargs,
            ) as response:
                data = await response.read()
                return transport.BufferedResponse(
                    response.status, response.headers, data
                )

        except aiohttp.ClientError as caught_exc:
            new_exc = exceptions.TransportError(caught_exc, retryable=True)
            raise new_exc from caught_exc

        except asyncio.TimeoutError as caught_exc:
            new_exc = exceptions.TransportError(caught_exc, retryable=True)
            raise new_exc from caught_exc

    async def close(self):
        """Close the underlying aiohttp session if it was created here."""
        if self._owns_session and self.session is not None:
            await self.session.close()
            self.session = None
