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

"""Environment variables used by :mod:`apicall`."""


APICALL_LOG_BODIES = "APICALL_LOG_BODIES"
"""Environment variable enabling request and response body logging.

Accepts ``true`` or ``false`` (case-insensitive). Sensitive fields are
hashed before they are written to the log.
"""

APICALL_TRANSPORT_TIMEOUT = "APICALL_TRANSPORT_TIMEOUT"
"""Environment variable defining the per-request transport timeout in seconds
used when a :class:`~apicall.client.Client` is not given one explicitly."""
