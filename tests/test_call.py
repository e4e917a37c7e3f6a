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

import datetime
import json

import pydantic
import pytest  # type: ignore

from apicall import call
from apicall import dates
from apicall import exceptions


class User(pydantic.BaseModel):
    id: str
    joined: datetime.date


class GetUser(call.Call[None, User]):
    return_type = User

    def __init__(self, user_id):
        self.user_id = user_id

    @property
    def path(self):
        return f"users/{self.user_id}"


class CreateUser(call.Call[User, User]):
    method = call.CallMethod.POST
    path = "users"
    return_type = User
    date_format = dates.DateFormat("%d.%m.%Y")

    def __init__(self, user):
        self.body = user


def test_call_method_values():
    assert call.CallMethod.GET == "GET"
    assert [method.value for method in call.CallMethod] == [
        "GET",
        "POST",
        "PUT",
        "DELETE",
    ]


def test_path_is_abstract():
    class NoPath(call.Call):
        pass

    with pytest.raises(TypeError):
        NoPath()


def test_defaults():
    descriptor = GetUser("42")

    assert descriptor.path == "users/42"
    assert descriptor.method is call.CallMethod.GET
    assert descriptor.build_query() is None
    assert descriptor.headers == {}
    assert descriptor.encode_body() is None
    assert descriptor.is_refresh_call is False
    assert descriptor.offline_data is None


def test_default_headers_are_read_only():
    descriptor = GetUser("42")

    with pytest.raises(TypeError):
        descriptor.headers["Authorization"] = "Bearer leaked"

    assert GetUser("43").headers == {}


def test_build_query_returns_parameters():
    descriptor = GetUser("42")
    descriptor.parameters = {"fields": "id"}

    assert descriptor.build_query() == {"fields": "id"}


def test_encode_body_uses_date_format():
    descriptor = CreateUser(User(id="7", joined=datetime.date(2024, 5, 1)))

    assert json.loads(descriptor.encode_body()) == {"id": "7", "joined": "01.05.2024"}


def test_decode_success_uses_date_format():
    descriptor = CreateUser(None)

    user = descriptor.decode_success(b'{"id": "7", "joined": "01.05.2024"}')

    assert user == User(id="7", joined=datetime.date(2024, 5, 1))


def test_decode_success_mismatch():
    with pytest.raises(exceptions.DecodeError):
        GetUser("42").decode_success(b'{"id": 7}')


def test_default_refresh_credential_raises():
    with pytest.raises(exceptions.RefreshError) as excinfo:
        GetUser("42").refresh_credential(object())

    assert "GetUser" in str(excinfo.value)
    assert not excinfo.value.retryable


@pytest.mark.parametrize(
    "data, expected",
    [
        (b'{"message": "Not found"}', "Not found"),
        (b'{"error": {"code": 403, "message": "Denied"}}', "Denied"),
        (
            b'{"error": "invalid_grant", "error_description": "Token expired"}',
            "invalid_grant: Token expired",
        ),
        (b'{"error_description": "Bad scope"}', "Bad scope"),
        (b'{"detail": "Throttled"}', "Throttled"),
        (b'{"error": "server_error"}', "server_error"),
        (b'{"errors": ["a", "b"]}', call.GENERIC_ERROR_MESSAGE),
        (b'["message"]', call.GENERIC_ERROR_MESSAGE),
        (b"<html>oops</html>", call.GENERIC_ERROR_MESSAGE),
        (b"", call.GENERIC_ERROR_MESSAGE),
        (None, call.GENERIC_ERROR_MESSAGE),
    ],
)
def test_extract_error_message(data, expected):
    assert call.extract_error_message(data) == expected


def test_decode_error_message_delegates():
    assert GetUser("1").decode_error_message(b'{"message": "Gone"}') == "Gone"
