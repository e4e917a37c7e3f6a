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

import pytest  # type: ignore

from apicall import dates

UTC = datetime.timezone.utc
PLUS_TWO = datetime.timezone(datetime.timedelta(hours=2))


def test_format_naive_without_zone():
    date_format = dates.DateFormat("%Y-%m-%d %H:%M")

    assert date_format.format(datetime.datetime(2024, 5, 1, 10, 30)) == "2024-05-01 10:30"


def test_format_converts_aware_value_into_zone():
    date_format = dates.DateFormat("%Y-%m-%d %H:%M", tzinfo=UTC)
    value = datetime.datetime(2024, 5, 1, 12, 30, tzinfo=PLUS_TWO)

    assert date_format.format(value) == "2024-05-01 10:30"


def test_format_assumes_zone_for_naive_value():
    date_format = dates.DateFormat("%Y-%m-%d %H:%M %z", tzinfo=PLUS_TWO)

    assert (
        date_format.format(datetime.datetime(2024, 5, 1, 12, 30))
        == "2024-05-01 12:30 +0200"
    )


def test_format_date():
    date_format = dates.DateFormat("%d.%m.%Y", tzinfo=UTC)

    assert date_format.format(datetime.date(2024, 5, 1)) == "01.05.2024"


def test_parse_attaches_zone():
    date_format = dates.DateFormat("%Y-%m-%d %H:%M", tzinfo=UTC)

    value = date_format.parse("2024-05-01 10:30")

    assert value == datetime.datetime(2024, 5, 1, 10, 30, tzinfo=UTC)
    assert value.tzinfo is UTC


def test_parse_keeps_explicit_offset():
    date_format = dates.DateFormat("%Y-%m-%d %H:%M %z", tzinfo=UTC)

    value = date_format.parse("2024-05-01 12:30 +0200")

    assert value.utcoffset() == datetime.timedelta(hours=2)


def test_parse_without_zone_is_naive():
    date_format = dates.DateFormat("%Y-%m-%d")

    assert date_format.parse("2024-05-01").tzinfo is None


def test_parse_date():
    date_format = dates.DateFormat("%d.%m.%Y")

    assert date_format.parse_date("01.05.2024") == datetime.date(2024, 5, 1)


def test_parse_mismatch():
    date_format = dates.DateFormat("%d.%m.%Y")

    with pytest.raises(ValueError):
        date_format.parse("2024-05-01")


def test_date_format_is_frozen():
    date_format = dates.DateFormat("%Y")

    with pytest.raises(AttributeError):
        date_format.pattern = "%m"
