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

"""Transport - Async HTTP client library support.

:mod:`apicall` is designed to work with various asynchronous HTTP client
libraries such as aiohttp and httpx. In order to work across these
libraries with different interfaces some abstraction is needed.

This module provides two interfaces that are implemented by transport
adapters. :class:`Request` defines the interface expected by
:mod:`apicall` to send requests. :class:`Response` defines the interface for
the return value of :class:`Request`.

Adapters read the whole response body before returning, so a
:class:`Response` is a plain value and never holds a connection open.
"""

import abc
import http.client as http_client
from typing import Any, Mapping, Optional

DEFAULT_REFRESH_STATUS_CODES = (http_client.UNAUTHORIZED,)

DEFAULT_MAX_REFRESH_ATTEMPTS = 1

DEFAULT_TIMEOUT = 180  # in seconds


class Response(metaclass=abc.ABCMeta):
    """HTTP Response data."""

    @property
    @abc.abstractmethod
    def status(self) -> int:
        """int: The HTTP status code."""
        raise NotImplementedError("status must be implemented.")

    @property
    @abc.abstractmethod
    def headers(self) -> Mapping[str, str]:
        """Mapping[str, str]: The HTTP response headers."""
        raise NotImplementedError("headers must be implemented.")

    @property
    @abc.abstractmethod
    def data(self) -> bytes:
        """bytes: The response body."""
        raise NotImplementedError("data must be implemented.")


class BufferedResponse(Response):
    """A fully read HTTP response.

    Args:
        status (int): The HTTP status code.
        headers (Mapping[str, str]): The HTTP response headers.
        data (bytes): The response body.
    """

    def __init__(self, status: int, headers: Mapping[str, str], data: bytes):
        self._status = status
        self._headers = headers
        self._data = data

    @property
    def status(self) -> int:
        return self._status

    @property
    def headers(self) -> Mapping[str, str]:
        return self._headers

    @property
    def data(self) -> bytes:
        return self._data

    def __repr__(self):
        size = len(self._data or b"")
        return f"BufferedResponse(status={self._status}, data={size} bytes)"


class Request(metaclass=abc.ABCMeta):
    """Interface for a callable that sends HTTP requests.

    Implementations are shared by all in-flight calls of a client and must
    be safe for concurrent use on its event loop.
    """

    @abc.abstractmethod
    async def __call__(
        self,
        url: str,
        method: str = "GET",
        body: Optional[bytes] = None,
        headers: Optional[Mapping[str, str]] = None,
        timeout: Optional[float] = None,
        **kwargs: Any,
    ) -> Response:
        """Sends an HTTP request.

        Args:
            url (str): The absolute URL to be requested.
            method (str): The HTTP method to use for the request.
            body (Optional[bytes]): The payload or body in HTTP request.
            headers (Optional[Mapping[str, str]]): Request headers.
            timeout (Optional[float]): The number of seconds to wait for a
                response from the server.
            kwargs: Additional arguments passed to the underlying library.

        Returns:
            Response: The HTTP response.

        Raises:
            apicall.exceptions.TransportError: If no response was obtained.
        """
        raise NotImplementedError("__call__ must be implemented.")

    async def close(self) -> None:
        """Releases the resources held by the adapter."""
