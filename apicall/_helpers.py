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

"""Helper functions for commonly used utilities."""

import hashlib
import json
import logging
import os
from typing import Any, List, Mapping, Optional, Tuple, Union

_SENSITIVE_FIELDS = {
    "accessToken",
    "access_token",
    "id_token",
    "idToken",
    "refresh_token",
    "refreshToken",
    "client_secret",
    "password",
    "token",
}

_SENSITIVE_HEADERS = {"authorization", "proxy-authorization", "cookie"}

_TRUTHY = ("true", "1")
_FALSY = ("false", "0", "")


def copy_docstring(source_class):
    """Decorator that copies a method's docstring from another class.

    Args:
        source_class (type): The class that has the documented method.

    Returns:
        Callable: A decorator that will copy the docstring of the same
            named method in the source class to the decorated method.
    """

    def decorator(method):
        if method.__doc__:
            raise ValueError("Method already has a docstring.")

        source_method = getattr(source_class, method.__name__)
        method.__doc__ = source_method.__doc__

        return method

    return decorator


def from_bytes(value: Union[str, bytes]) -> str:
    """Converts bytes to a string value, if necessary.

    Args:
        value (Union[str, bytes]): The value to be converted.

    Returns:
        str: The original value converted to unicode (if bytes) or as passed in
            if it started out as unicode.

    Raises:
        ValueError: If the value could not be converted to unicode.
    """
    result = value.decode("utf-8") if isinstance(value, bytes) else value
    if isinstance(result, str):
        return result
    raise ValueError(f"{value!r} could not be converted to unicode")


def get_bool_from_env(name: str, default: bool = False) -> bool:
    """Reads a boolean flag from the environment.

    Args:
        name (str): The environment variable name.
        default (bool): Returned when the variable is unset.

    Returns:
        bool: The parsed value.

    Raises:
        ValueError: If the variable is set to something other than a
            recognized boolean literal.
    """
    value = os.environ.get(name)
    if value is None:
        return default
    value = value.strip().lower()
    if value in _TRUTHY:
        return True
    if value in _FALSY:
        return False
    raise ValueError(f"Environment variable {name} must be 'true' or 'false'.")


def get_float_from_env(name: str, default: Optional[float]) -> Optional[float]:
    """Reads a number of seconds from the environment."""
    value = os.environ.get(name)
    if not value:
        return default
    try:
        return float(value)
    except ValueError as caught_exc:
        raise ValueError(
            f"Environment variable {name} must be a number, got {value!r}."
        ) from caught_exc


def is_logging_enabled(logger: logging.Logger) -> bool:
    """Checks if debug logging is enabled for the given logger."""
    return logger.isEnabledFor(logging.DEBUG)


def _hash_value(value: Any, field_name: str) -> str:
    hash_object = hashlib.sha512()
    hash_object.update(str(value).encode("utf-8"))
    return f"hashed_{field_name}-{hash_object.hexdigest()}"


def _hash_sensitive_info(data: Any) -> Any:
    """Hashes sensitive fields of a decoded JSON value, recursively."""
    if isinstance(data, dict):
        return {
            key: _hash_value(value, key)
            if key in _SENSITIVE_FIELDS
            else _hash_sensitive_info(value)
            for key, value in data.items()
        }
    if isinstance(data, list):
        return [_hash_sensitive_info(item) for item in data]
    return data


def _redact_headers(headers: Optional[Mapping[str, str]]) -> List[Tuple[str, str]]:
    """Returns the header lines, in order, with credentials hashed.

    A multimap such as :class:`multidict.CIMultiDict` yields one pair per
    line, so repeated headers stay separate.
    """
    redacted = []
    for key, value in (headers or {}).items():
        if key.lower() in _SENSITIVE_HEADERS:
            value = _hash_value(value, key.lower())
        redacted.append((key, value))
    return redacted


def _parse_body(body: Optional[bytes]) -> Any:
    if not body:
        return None
    try:
        return _hash_sensitive_info(json.loads(from_bytes(body)))
    except (ValueError, TypeError):
        return "<non-JSON body omitted>"


def request_log(
    logger: logging.Logger,
    method: str,
    url: str,
    body: Optional[bytes],
    headers: Optional[Mapping[str, str]],
    log_body: bool = False,
) -> None:
    """Logs an outgoing HTTP request at DEBUG level.

    Args:
        logger: The logger to write to.
        method: The HTTP method.
        url: The absolute URL being requested.
        body: The serialized request body, if any.
        headers: The request headers.
        log_body: Whether to include the (hashed) body in the record.
    """
    if not is_logging_enabled(logger):
        return
    http_request = {
        "method": method,
        "url": url,
        "headers": _redact_headers(headers),
    }
    if log_body:
        http_request["body"] = _parse_body(body)
    logger.debug("Making request...", extra={"httpRequest": http_request})


def response_log(
    logger: logging.Logger, status: int, body: Optional[bytes], log_body: bool = False
) -> None:
    """Logs a received HTTP response at DEBUG level.

    Args:
        logger: The logger to write to.
        status: The HTTP status code.
        body: The raw response body.
        log_body: Whether to include the (hashed) body in the record.
    """
    if not is_logging_enabled(logger):
        return
    http_response = {"status": status}
    if log_body:
        http_response["payload"] = _parse_body(body)
    logger.debug("Response received...", extra={"httpResponse": http_response})
