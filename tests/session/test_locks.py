# Copyright 2026 Firefly Software Solutions Inc.
#
# Licensed under the Apache License, Version 2.0 (the "License");
# you may not use this file except in compliance with the License.
# You may obtain a copy of the License at
#
#     http://www.apache.org/licenses/LICENSE-2.0
#
# Unless required by applicable law or agreed to in writing, software
# distributed under the License is distributed on an "AS IS" BASIS,
# WITHOUT WARRANTIES OR CONDITIONS OF ANY KIND, either express or implied.
# See the License for the specific language governing permissions and
# limitations under the License.
"""Tests for ReadWriteLock."""

from __future__ import annotations

import threading

import pytest

from docsession.session.locks import ReadWriteLock


class TestReadWriteLock:
    def test_readers_share_the_lock(self):
        lock = ReadWriteLock()
        both_inside = threading.Barrier(2, timeout=5)

        def reader() -> None:
            with lock.read_locked():
                both_inside.wait()

        threads = [threading.Thread(target=reader) for _ in range(2)]
        for thread in threads:
            thread.start()
        for thread in threads:
            thread.join(timeout=5)

        assert not both_inside.broken

    def test_writer_waits_for_reader(self):
        lock = ReadWriteLock()
        acquired = threading.Event()

        def writer() -> None:
            with lock.write_locked():
                acquired.set()

        lock.acquire_read()
        thread = threading.Thread(target=writer)
        thread.start()
        assert not acquired.wait(timeout=0.1)

        lock.release_read()
        thread.join(timeout=5)
        assert acquired.is_set()

    def test_reader_waits_for_writer(self):
        lock = ReadWriteLock()
        acquired = threading.Event()

        def reader() -> None:
            with lock.read_locked():
                acquired.set()

        lock.acquire_write()
        thread = threading.Thread(target=reader)
        thread.start()
        assert not acquired.wait(timeout=0.1)

        lock.release_write()
        thread.join(timeout=5)
        assert acquired.is_set()

    def test_lock_released_when_block_raises(self):
        lock = ReadWriteLock()
        with pytest.raises(ValueError), lock.write_locked():
            raise ValueError("boom")

        with lock.write_locked():
            pass

    def test_release_without_acquire_raises(self):
        lock = ReadWriteLock()
        with pytest.raises(RuntimeError):
            lock.release_read()
        with pytest.raises(RuntimeError):
            lock.release_write()
