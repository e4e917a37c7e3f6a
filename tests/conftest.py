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

import collections
import json

import pytest  # type: ignore

from apicall import client
from apicall import transport

SentRequest = collections.namedtuple(
    "SentRequest", ["url", "method", "body", "headers", "timeout"]
)


def _make_response(status=200, payload=None, data=None, headers=None):
    if data is None:
        data = json.dumps(payload).encode("utf-8") if payload is not None else b""
    return transport.BufferedResponse(status, headers or {}, data)


class FakeTransport(transport.Request):
    """Replays queued responses and records every request it is given.

    Responses queued with a ``url`` are only returned for requests to that
    URL (query excluded); the others are returned in order for any URL.
    """

    def __init__(self):
        self.requests = []
        self.closed = False
        self._default = collections.deque()
        self._routes = collections.defaultdict(collections.deque)

    def add(self, *responses, url=None):
        queue = self._default if url is None else self._routes[url]
        queue.extend(responses)

    async def __call__(
        self, url, method="GET", body=None, headers=None, timeout=None, **kwargs
    ):
        self.requests.append(SentRequest(url, method, body, headers, timeout))
        route = self._routes.get(url.split("?")[0])
        item = route.popleft() if route else self._default.popleft()
        if isinstance(item, BaseException):
            raise item
        return item

    async def close(self):
        self.closed = True


@pytest.fixture
def make_response():
    return _make_response


@pytest.fixture
def fake_transport():
    return FakeTransport()


@pytest.fixture
def api(fake_transport):
    dispatcher = client.Client(transport=fake_transport, timeout=30, log_bodies=False)
    yield dispatcher
    dispatcher.close()
