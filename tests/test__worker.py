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

import asyncio
import threading

import pytest  # type: ignore

from apicall import _worker
from apicall import exceptions


@pytest.fixture
def worker():
    loop_thread = _worker.LoopThread(name="test-dispatcher")
    yield loop_thread
    loop_thread.stop()


async def _whereami(loop_thread):
    await asyncio.sleep(0)
    return threading.current_thread().name, loop_thread.is_current()


def test_starts_lazily(worker):
    assert not worker.is_running()

    worker.loop

    assert worker.is_running()


def test_submit_runs_on_worker_thread(worker):
    future = worker.submit(_whereami, worker)

    assert future.result(5) == ("test-dispatcher", True)
    assert not worker.is_current()


def test_submit_reuses_loop(worker):
    first = worker.loop
    worker.submit(_whereami, worker).result(5)

    assert worker.loop is first


def test_stop(worker):
    worker.submit(_whereami, worker).result(5)

    worker.stop()

    assert not worker.is_running()
    with pytest.raises(exceptions.ApiCallError):
        worker.submit(_whereami, worker)


def test_stop_without_start(worker):
    worker.stop()

    assert not worker.is_running()
    with pytest.raises(exceptions.ApiCallError):
        worker.loop
