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

"""Classification of HTTP responses."""

import dataclasses
import enum
import http.client as http_client
from typing import Mapping

from apicall import transport


class Outcome(enum.Enum):
    """What the dispatcher does with a response."""

    SUCCESS = "success"
    REFRESHABLE_AUTH_FAILURE = "refreshable_auth_failure"
    TERMINAL_FAILURE = "terminal_failure"


@dataclasses.dataclass(frozen=True)
class ClassifiedResponse:
    """A raw response together with its outcome.

    Attributes:
        status (int): The HTTP status code.
        headers (Mapping[str, str]): The response headers.
        data (bytes): The response body.
        outcome (Outcome): The classification.
    """

    status: int
    headers: Mapping[str, str]
    data: bytes
    outcome: Outcome

    @property
    def ok(self) -> bool:
        return self.outcome is Outcome.SUCCESS


def classify(
    response: transport.Response, can_refresh: bool
) -> ClassifiedResponse:
    """Classifies a response.

    Statuses from 100 to 299 are successes. Statuses below 100 are not
    valid HTTP and are terminal failures. A 401 is refreshable if
    ``can_refresh`` is true. Everything else is a terminal failure.

    Args:
        response (apicall.transport.Response): The raw response.
        can_refresh (bool): Whether the logical call may still refresh its
            credential.

    Returns:
        ClassifiedResponse: The classified response.
    """
    status = response.status
    if http_client.CONTINUE <= status < http_client.MULTIPLE_CHOICES:
        outcome = Outcome.SUCCESS
    elif status in transport.DEFAULT_REFRESH_STATUS_CODES and can_refresh:
        outcome = Outcome.REFRESHABLE_AUTH_FAILURE
    else:
        outcome = Outcome.TERMINAL_FAILURE
    return ClassifiedResponse(
        status=status,
        headers=response.headers,
        data=response.data or b"",
        outcome=outcome,
    )
