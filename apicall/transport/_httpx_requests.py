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

"""Transport adapter for Async HTTP (httpx).

NOTE: This adapter is marked internal. This surface may change in minor
releases.
"""

import asyncio
import logging

import httpx  # type: ignore

from apicall import _helpers
from apicall import exceptions
from apicall import transport

_LOGGER = logging.getLogger(__name__)


class Request(transport.Request):
    """httpx request adapter.

    Can be passed to :class:`~apicall.client.Client` in place of the default
    aiohttp adapter::

        from apicall import client
        from apicall.transport import _httpx_requests

        api = client.Client(transport=_httpx_requests.Request())

    Args:
        client (httpx.AsyncClient): The client to use to make HTTP requests.
            If not specified, a client is created on first use and closed by
            :meth:`close`.

    .. automethod:: __call__
    """

    def __init__(self, client=None):
        self.client = client
        self._owns_client = client is None

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
        if self.client is None:
            self.client = httpx.AsyncClient()

        if headers is not None:
            # Keeps repeated header lines.
            headers = list(headers.items())

        try:
            _LOGGER.debug("Making request: %s %s", method, url)
            response = await self.client.request(
                method, url, content=body, headers=headers, timeout=timeout, **kwargs
            )
            return transport.BufferedResponse(
                response.status_code, response.headers, response.content
            )

        except httpx.RequestError as caught_exc:
            new_exc = exceptions.TransportError(caught_exc, retryable=True)
            raise new_exc from caught_exc

        except asyncio.TimeoutError as caught_exc:
            new_exc = exceptions.TransportError(caught_exc, retryable=True)
            raise new_exc from caught_exc

    async def close(self):
        """Close the underlying httpx client if it was created here."""
        if self._owns_client and self.client is not None:
            await self.client.aclose()
            self.client = None
