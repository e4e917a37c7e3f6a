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

"""Declarative HTTP calls with one-shot credential refresh."""

import logging

from apicall.call import Call, CallMethod
from apicall.client import Client
from apicall.dates import DateFormat
from apicall.result import Result
from apicall.version import __version__


__all__ = ["Call", "CallMethod", "Client", "DateFormat", "Result", "__version__"]


# Set default logging handler to avoid "No handler found" warnings.
logging.getLogger(__name__).addHandler(logging.NullHandler())
