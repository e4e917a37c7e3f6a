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

"""Builds wire requests from call descriptors.

:func:`build` is a pure function: it reads the descriptor, encodes its body
and returns an immutable :class:`BuiltRequest`, or raises before anything is
sent. Every attempt of a call, including the retry after a credential
refresh, builds a fresh request.
"""

import dataclasses
import urllib.parse
from typing import Optional

from multidict import CIMultiDict, CIMultiDictProxy

from apicall import exceptions

_PATH_SAFE = "/:@!$&'()*+,;=-._~"

_ALLOWED_SCHEMES = ("http", "https")

_CONTENT_TYPE = "Content-Type"
_JSON_CONTENT_TYPE = "application/json"


@dataclasses.dataclass(frozen=True)
class BuiltRequest:
    """A fully formed HTTP request.

    Attributes:
        method (str): The HTTP method.
        url (str): The absolute URL, query included.
        headers (CIMultiDictProxy[str]): The request headers. Names are case
            insensitive and may repeat.
        body (Optional[bytes]): The serialized body, if any.
    """

    method: str
    url: str
    headers: CIMultiDictProxy
    body: Optional[bytes] = None


def join_url(base_url: str, path: str) -> str:
    """Appends ``path`` to ``base_url`` with exactly one separating slash.

    Raises:
        apicall.exceptions.InvalidURLError: If ``base_url`` cannot be split.
    """
    if not path:
        return base_url
    try:
        split = urllib.parse.urlsplit(base_url)
    except ValueError as caught_exc:
        raise exceptions.InvalidURLError(
            f"Invalid base URL {base_url!r}: {caught_exc}"
        ) from caught_exc
    joined_path = split.path.rstrip("/") + "/" + path.lstrip("/")
    return urllib.parse.urlunsplit(split._replace(path=joined_path))


def normalize_url(url: str) -> urllib.parse.SplitResult:
    """Removes percent-encoding from the path of ``url`` and validates it.

    The query is left encoded so that :func:`update_query` decodes it
    exactly once.

    Args:
        url (str): The joined address.

    Returns:
        urllib.parse.SplitResult: The components, with a decoded path and
        fragment and the original query.

    Raises:
        apicall.exceptions.InvalidURLError: If the address cannot be decoded
            or is not an absolute http(s) URL.
    """
    try:
        split = urllib.parse.urlsplit(url.strip())
        # Accessing the port validates it.
        split.port
        split = split._replace(
            path=urllib.parse.unquote(split.path, errors="strict"),
            fragment=urllib.parse.unquote(split.fragment, errors="strict"),
        )
        netloc = urllib.parse.unquote(split.netloc, errors="strict")
    except ValueError as caught_exc:
        raise exceptions.InvalidURLError(
            f"Invalid URL {url!r}: {caught_exc}"
        ) from caught_exc

    if split.scheme.lower() not in _ALLOWED_SCHEMES:
        raise exceptions.InvalidURLError(
            f"URL must start with http:// or https://. Got: {url!r}"
        )
    if not split.hostname or any(char.isspace() for char in netloc):
        raise exceptions.InvalidURLError(f"URL has no valid host. Got: {url!r}")
    return split


def update_query(split: urllib.parse.SplitResult, params) -> str:
    """Merges query parameters into a normalized URL and re-encodes it.

    Parameters already in the URL are kept unless ``params`` supplies the
    same key, in which case they are replaced.

    Args:
        split (urllib.parse.SplitResult): The URL from :func:`normalize_url`.
        params (Optional[Mapping[str, str]]): The parameters to add.

    Returns:
        str: The encoded URL.
    """
    params = dict(params or {})
    query = [
        (key, value)
        for key, value in urllib.parse.parse_qsl(split.query, keep_blank_values=True)
        if key not in params
    ]
    query.extend((str(key), str(value)) for key, value in params.items())

    return urllib.parse.urlunsplit(
        (
            split.scheme,
            split.netloc,
            urllib.parse.quote(split.path, safe=_PATH_SAFE),
            urllib.parse.urlencode(query, quote_via=urllib.parse.quote, safe=""),
            urllib.parse.quote(split.fragment, safe=_PATH_SAFE + "?"),
        )
    )


def build_headers(headers, has_body: bool = False) -> CIMultiDictProxy:
    """Builds the header multimap of a request.

    Headers are additive: a sequence value adds one line per item, and
    names differing only in case are kept as separate lines of the same
    header.

    Args:
        headers (Optional[Mapping[str, Union[str, Sequence[str]]]]): The
            descriptor's headers.
        has_body (bool): Whether the request carries a body. A JSON content
            type is added if none was given.

    Returns:
        CIMultiDictProxy[str]: The immutable headers.
    """
    result: CIMultiDict = CIMultiDict()
    for name, value in (headers or {}).items():
        if isinstance(value, (list, tuple)):
            for item in value:
                result.add(name, _header_value(item))
        else:
            result.add(name, _header_value(value))
    if has_body and _CONTENT_TYPE not in result:
        result.add(_CONTENT_TYPE, _JSON_CONTENT_TYPE)
    return CIMultiDictProxy(result)


def _header_value(value) -> str:
    if isinstance(value, bytes):
        return value.decode("utf-8")
    return str(value)


def build(base_url: str, call) -> BuiltRequest:
    """Builds the request for ``call`` against ``base_url``.

    Args:
        base_url (str): The base address, e.g. ``https://api.example.com/v1``.
        call (apicall.call.Call): The call descriptor.

    Returns:
        BuiltRequest: The request.

    Raises:
        apicall.exceptions.InvalidURLError: If no valid URL can be composed.
        apicall.exceptions.EncodeError: If the body cannot be serialized.
    """
    split = normalize_url(join_url(base_url, call.path))
    url = update_query(split, call.build_query())
    body = call.encode_body()
    headers = build_headers(call.headers, has_body=body is not None)
    method = getattr(call.method, "value", call.method)
    return BuiltRequest(method=method, url=url, headers=headers, body=body)
