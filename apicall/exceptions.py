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

"""Exceptions used in the apicall package."""

from typing import Any, Optional


class ApiCallError(Exception):
    """Base class for all apicall errors.

    Args:
        retryable (bool): Indicates whether the error is retryable.
    """

    def __init__(self, *args: Any, **kwargs: Any) -> None:
        super().__init__(*args)
        self._retryable: bool = kwargs.get("retryable", False)

    @property
    def retryable(self) -> bool:
        """Indicates whether the error is retryable."""
        return self._retryable


class InvalidURLError(ApiCallError, ValueError):
    """Used to indicate that a request could not be addressed."""


class EncodeError(ApiCallError, ValueError):
    """Used to indicate that a request body could not be serialized."""


class DecodeError(ApiCallError, ValueError):
    """Used to indicate that a response payload did not match the expected
    shape."""


class TransportError(ApiCallError):
    """Used to indicate an error occurred during an HTTP request and no
    response was obtained."""


class RefreshError(ApiCallError):
    """Used to indicate that refreshing an expired credential failed."""


class ServerError(ApiCallError):
    """A response was received but its status indicates failure.

    Args:
        status (int): The HTTP status code of the failing response.
        message (str): The error message extracted from the response body.
        body (Optional[bytes]): The raw body of the failing response.
    """

    def __init__(
        self, status: int, message: str, body: Optional[bytes] = None, **kwargs: Any
    ) -> None:
        super().__init__(f"{status}: {message}", **kwargs)
        self.status = status
        self.message = message
        self.body = body
