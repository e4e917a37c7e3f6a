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

"""The outcome of a logical call."""

import dataclasses
from typing import Generic, Optional, TypeVar

T = TypeVar("T")


@dataclasses.dataclass(frozen=True)
class Result(Generic[T]):
    """Either a decoded value or the error that ended the call.

    Attributes:
        value (Optional[T]): The decoded payload of a successful call.
        error (Optional[Exception]): The error of a failed call, usually an
            :class:`~apicall.exceptions.ApiCallError`.
    """

    value: Optional[T] = None
    error: Optional[BaseException] = None

    @classmethod
    def success(cls, value: T) -> "Result[T]":
        return cls(value=value)

    @classmethod
    def failure(cls, error: BaseException) -> "Result[T]":
        return cls(error=error)

    @property
    def ok(self) -> bool:
        """bool: True if the call succeeded."""
        return self.error is None

    def unwrap(self) -> T:
        """Returns the value, or raises the error of a failed call."""
        if self.error is not None:
            raise self.error
        return self.value  # type: ignore
