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

"""Interfaces for call descriptors.

A call descriptor describes one kind of request: where it goes, how its
body is encoded and how its responses are decoded. Endpoints are added by
subclassing :class:`Call`; the dispatcher has no per-endpoint code::

    class GetUser(call.Call[None, User]):
        return_type = User

        def __init__(self, user_id, token):
            self.user_id = user_id
            self.token = token

        @property
        def path(self):
            return f"users/{self.user_id}"

        @property
        def headers(self):
            return {"Authorization": f"Bearer {self.token}"}

        async def refresh_credential(self, client):
            self.token = await session.refresh(client)

    result = await client.fetch(GetUser("42", token), "https://api.example.com")
"""

import abc
import enum
import json
import types
from typing import Any, Generic, Mapping, Optional, Sequence, TypeVar, Union

from apicall import _helpers
from apicall import exceptions
from apicall import serialization
from apicall.dates import DateFormat

BodyT = TypeVar("BodyT")
ReturnT = TypeVar("ReturnT")

GENERIC_ERROR_MESSAGE = "The server returned an error response."

_ERROR_MESSAGE_KEYS = ("message", "error_description", "detail", "error")


class CallMethod(str, enum.Enum):
    """The HTTP methods a call can use."""

    GET = "GET"
    POST = "POST"
    PUT = "PUT"
    DELETE = "DELETE"


class Call(Generic[BodyT, ReturnT], metaclass=abc.ABCMeta):
    """Base class for all call descriptors.

    Subclasses must provide :attr:`path` and usually set
    :attr:`return_type`. All other attributes have defaults and may be
    overridden as class attributes or properties.
    """

    method: CallMethod = CallMethod.GET
    """CallMethod: The HTTP method of the request."""

    parameters: Optional[Mapping[str, str]] = None
    """Optional[Mapping[str, str]]: Query parameters appended to the URL."""

    headers: Mapping[str, Union[str, Sequence[str]]] = types.MappingProxyType({})
    """Mapping[str, Union[str, Sequence[str]]]: Request headers. A sequence
    value adds one header line per item."""

    body: Optional[BodyT] = None
    """Optional[BodyT]: The request body. ``None`` sends no payload."""

    return_type: Any = Any
    """The type a successful response payload is decoded into."""

    date_format: Optional[DateFormat] = None
    """Optional[DateFormat]: The format used for every date field of the body
    and of the response. ISO 8601 is used if ``None``."""

    is_refresh_call: bool = False
    """bool: True if this call itself refreshes a credential. An
    authorization failure of such a call is never retried."""

    offline_data: Optional[bytes] = None
    """Optional[bytes]: A canned success payload. If set, the dispatcher
    decodes it instead of sending a request."""

    @property
    @abc.abstractmethod
    def path(self) -> str:
        """str: The path of the endpoint, relative to the base address."""
        raise NotImplementedError("path must be implemented")

    def build_query(self) -> Optional[Mapping[str, str]]:
        """Returns the query parameters of the request.

        Returns:
            Optional[Mapping[str, str]]: The parameters, or ``None``.
        """
        return self.parameters

    def encode_body(self) -> Optional[bytes]:
        """Serializes :attr:`body`.

        Returns:
            Optional[bytes]: The payload, or ``None`` if there is no body.

        Raises:
            apicall.exceptions.EncodeError: If the body cannot be serialized.
        """
        return serialization.encode(self.body, self.date_format)

    def decode_success(self, data: bytes) -> ReturnT:
        """Decodes a successful response payload into :attr:`return_type`.

        Args:
            data (bytes): The response body.

        Raises:
            apicall.exceptions.DecodeError: If the payload does not match.
        """
        return serialization.decode(data, self.return_type, self.date_format)

    def decode_error_message(self, data: bytes) -> str:
        """Extracts a human readable message from a failure body.

        The default understands the common JSON error shapes, such as
        ``{"message": ...}``, ``{"error": {"message": ...}}`` and OAuth 2.0
        ``{"error": ..., "error_description": ...}``. Anything else yields a
        generic message. This method never raises.

        Args:
            data (bytes): The response body.

        Returns:
            str: The error message.
        """
        return extract_error_message(data)

    def refresh_credential(self, client: Any) -> Any:
        """Refreshes the credential used by this call.

        May be implemented as a coroutine or as a regular method. It returns
        normally if the credential was refreshed and raises otherwise.

        Args:
            client (apicall.client.Client): The dispatching client, which can
                be used to send the refresh request.

        Raises:
            apicall.exceptions.RefreshError: If the credential could not be
                refreshed. The default implementation always raises.
        """
        del client
        raise exceptions.RefreshError(
            f"{type(self).__name__} does not support credential refresh.",
            retryable=False,
        )


def extract_error_message(data: Optional[bytes]) -> str:
    """Best-effort extraction of an error message from a JSON body.

    Args:
        data (Optional[bytes]): The response body.

    Returns:
        str: The message, or :data:`GENERIC_ERROR_MESSAGE`.
    """
    if not data:
        return GENERIC_ERROR_MESSAGE
    try:
        payload = json.loads(_helpers.from_bytes(data))
    except ValueError:
        return GENERIC_ERROR_MESSAGE
    return _message_from(payload) or GENERIC_ERROR_MESSAGE


def _message_from(payload: Any) -> Optional[str]:
    if not isinstance(payload, dict):
        return None

    error = payload.get("error")
    description = payload.get("error_description")
    if isinstance(error, str) and isinstance(description, str):
        return f"{error}: {description}"

    for key in _ERROR_MESSAGE_KEYS:
        value = payload.get(key)
        if isinstance(value, str) and value:
            return value
        nested = _message_from(value)
        if nested:
            return nested
    return None

