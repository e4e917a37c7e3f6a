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

import dataclasses
import json

import pytest  # type: ignore

from apicall import call
from apicall import exceptions
from apicall import request

BASE_URL = "https://api.example.com"


class Search(call.Call):
    def __init__(self, path="search", parameters=None, headers=None, body=None):
        self._path = path
        self.parameters = parameters
        if headers is not None:
            self.headers = headers
        self.body = body

    @property
    def path(self):
        return self._path


@pytest.mark.parametrize(
    "base_url, path, expected",
    [
        ("https://api.example.com", "users", "https://api.example.com/users"),
        ("https://api.example.com/", "/users", "https://api.example.com/users"),
        ("https://api.example.com/v1//", "users", "https://api.example.com/v1/users"),
        ("https://api.example.com/v1?key=abc", "users", "https://api.example.com/v1/users?key=abc"),
        ("https://api.example.com/v1", "", "https://api.example.com/v1"),
    ],
)
def test_join_url(base_url, path, expected):
    assert request.join_url(base_url, path) == expected


def test_build_escapes_path_and_query():
    built = request.build(BASE_URL, Search("users/a b", parameters={"q": "x&y"}))

    assert built.url == "https://api.example.com/users/a%20b?q=x%26y"
    assert built.method == "GET"
    assert built.body is None


def test_build_does_not_double_escape():
    built = request.build(BASE_URL, Search("users/a%20b", parameters={"q": "x%26y"}))

    assert built.url == "https://api.example.com/users/a%20b?q=x%2526y"


def test_build_keeps_non_ascii_path():
    built = request.build(BASE_URL, Search("cities/Zürich"))

    assert built.url == "https://api.example.com/cities/Z%C3%BCrich"


def test_build_merges_base_query():
    built = request.build(
        "https://api.example.com/v1?key=abc&q=old",
        Search(parameters={"q": "new", "page": 2}),
    )

    assert built.url == "https://api.example.com/v1/search?key=abc&q=new&page=2"


def test_build_keeps_encoded_base_query_values():
    built = request.build(
        "https://h.example/api?sig=1%2B2", Search("items", parameters={"q": "v"})
    )

    assert built.url == "https://h.example/api/items?sig=1%2B2&q=v"


def test_build_keeps_encoded_ampersand_in_base_query():
    built = request.build("https://h.example/api?sig=a%26b", Search("items"))

    assert built.url == "https://h.example/api/items?sig=a%26b"


def test_build_escapes_encoded_question_mark_in_path():
    built = request.build(BASE_URL, Search("files/what%3F"))

    assert built.url == "https://api.example.com/files/what%3F"


@pytest.mark.parametrize(
    "base_url",
    [
        "not a url",
        "ftp://files.example.com",
        "https://",
        "https://exa mple.com",
        "https://example.com:99999",
        "https://example.com/%ff",
        "",
    ],
)
def test_build_invalid_url(base_url):
    with pytest.raises(exceptions.InvalidURLError) as excinfo:
        request.build(base_url, Search())

    assert isinstance(excinfo.value, ValueError)


def test_build_json_body():
    built = request.build(BASE_URL, Search(body={"name": "ann"}))

    assert json.loads(built.body) == {"name": "ann"}
    assert built.headers["content-type"] == "application/json"


def test_build_keeps_given_content_type():
    built = request.build(
        BASE_URL,
        Search(body={"name": "ann"}, headers={"content-type": "application/merge-patch+json"}),
    )

    assert built.headers.getall("Content-Type") == ["application/merge-patch+json"]


def test_build_no_content_type_without_body():
    built = request.build(BASE_URL, Search())

    assert "Content-Type" not in built.headers


def test_build_encode_error():
    with pytest.raises(exceptions.EncodeError):
        request.build(BASE_URL, Search(body={"handle": object()}))


def test_build_uses_method():
    descriptor = Search()
    descriptor.method = call.CallMethod.DELETE

    assert request.build(BASE_URL, descriptor).method == "DELETE"


def test_build_headers_are_additive():
    headers = request.build_headers(
        {"Accept": ["application/json", "text/plain"], "accept": "*/*", "X-Id": 7}
    )

    assert headers.getall("ACCEPT") == ["application/json", "text/plain", "*/*"]
    assert headers["x-id"] == "7"


def test_build_headers_bytes_value():
    headers = request.build_headers({"X-Token": b"abc"})

    assert headers["X-Token"] == "abc"


def test_built_request_is_immutable():
    built = request.build(BASE_URL, Search(headers={"X-Id": "1"}))

    with pytest.raises(dataclasses.FrozenInstanceError):
        built.url = "https://evil.example.com"
    with pytest.raises(TypeError):
        built.headers["X-Id"] = "2"
