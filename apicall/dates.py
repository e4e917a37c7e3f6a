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

"""Custom date formats for request and response payloads.

A :class:`DateFormat` is attached to a :class:`~apicall.call.Call` to make
every date and datetime field in its body and its response use one
``strftime`` / ``strptime`` pattern instead of ISO 8601::

    class ListEvents(call.Call):
        path = "events"
        return_type = List[Event]
        date_format = dates.DateFormat("%d.%m.%Y %H:%M", tzinfo=BERLIN)
"""

import dataclasses
import datetime
from typing import Optional, Union


@dataclasses.dataclass(frozen=True)
class DateFormat:
    """A date format used for both serialization and deserialization.

    Args:
        pattern (str): A ``strftime`` / ``strptime`` pattern.
        tzinfo (Optional[datetime.tzinfo]): The zone the pattern's wall clock
            is expressed in. Aware values are converted into it and naive
            values are assumed to be in it before formatting. Parsed values
            without an offset get it attached. If ``None``, values are
            formatted as given and parsed values stay naive.
    """

    pattern: str
    tzinfo: Optional[datetime.tzinfo] = None

    def format(self, value: Union[datetime.date, datetime.datetime]) -> str:
        """Renders a date or datetime with this format.

        Raises:
            ValueError: If the value cannot be rendered with the pattern.
        """
        if isinstance(value, datetime.datetime) and self.tzinfo is not None:
            if value.tzinfo is None:
                value = value.replace(tzinfo=self.tzinfo)
            else:
                value = value.astimezone(self.tzinfo)
        return value.strftime(self.pattern)

    def parse(self, text: str) -> datetime.datetime:
        """Parses a datetime string with this format.

        Raises:
            ValueError: If the string does not match the pattern.
        """
        value = datetime.datetime.strptime(text, self.pattern)
        if value.tzinfo is None and self.tzinfo is not None:
            value = value.replace(tzinfo=self.tzinfo)
        return value

    def parse_date(self, text: str) -> datetime.date:
        """Parses a date string with this format."""
        return self.parse(text).date()
