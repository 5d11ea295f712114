# tests/unit/test_build_cache.py
"""
Tests for BuildCache bookkeeping and single-flight coordination.
"""

from __future__ import annotations

import threading
import time
from types import ModuleType

import pytest

from modelgen.build import BuildCache, BuildResult, BuildState


@pytest.fixture
def module() -> ModuleType:
    return ModuleType("modelgen_generated_cache_test")


class TestModules:
    def test_put_and_get(self, cache, module):
        assert cache.get_module("m") is None
        cache.put_module("m", module)
        assert cache.get_module("m") is module
        assert cache.has_module("m")
        assert len(cache) == 1

    def test_loaded_paths(self, cache, module, tmp_path):
        path = tmp_path / "App.py"
        cache.put_loaded(path, module)
        assert cache.get_loaded(str(path)) is module

        cache.forget_path(path)
        assert cache.get_loaded(path) is None
        assert cache.known_file_exists(path) is False

    def test_clear(self, cache, module, tmp_path):
        cache.put_module("m", module)
        cache.file_exists(tmp_path / "App.py")
        cache.clear()
        assert len(cache) == 0
        assert cache.known_file_exists(tmp_path / "App.py") is None


class TestFilePresence:
    def test_file_exists_checks_disk(self, cache, tmp_path):
        path = tmp_path / "App.py"
        assert cache.known_file_exists(path) is None
        assert cache.file_exists(path) is False
        path.write_text("x = 1\n", encoding="utf-8")
        assert cache.known_file_exists(path) is False
        assert cache.file_exists(path) is True
        assert cache.known_file_exists(path) is True

    def test_directory_is_not_an_artifact(self, cache, tmp_path):
        assert cache.file_exists(tmp_path) is False


def wait_until(predicate, timeout=5.0) -> bool:
    deadline = time.monotonic() + timeout
    while time.monotonic() < deadline:
        if predicate():
            return True
        time.sleep(0.01)
    return False


class TestSingleFlight:
    def test_owner_gets_result(self, cache, module, tmp_path):
        result = BuildResult(BuildState.COMPILED, module)
        assert cache.single_flight(tmp_path / "App.py", lambda: result) is result
        assert not cache.in_flight(tmp_path / "App.py")

    def test_owner_exception_propagates(self, cache, tmp_path):
        def fail():
            raise RuntimeError("boom")

        with pytest.raises(RuntimeError, match="boom"):
            cache.single_flight(tmp_path / "App.py", fail)
        assert not cache.in_flight(tmp_path / "App.py")

    def test_waiter_gets_reused_result(self, cache, module, tmp_path):
        path = tmp_path / "App.py"
        started = threading.Event()
        release = threading.Event()
        calls = []
        results = {}

        def build():
            calls.append(1)
            started.set()
            release.wait(timeout=5)
            return BuildResult(BuildState.COMPILED, module)

        owner = threading.Thread(target=lambda: results.setdefault("owner", cache.single_flight(path, build)))
        owner.start()
        assert started.wait(timeout=5)

        waiter = threading.Thread(target=lambda: results.setdefault("waiter", cache.single_flight(path, build)))
        waiter.start()
        # Relative and resolved spellings share one in-flight entry.
        assert wait_until(lambda: cache.waiting(path.parent / "." / path.name) == 1)
        release.set()
        owner.join(timeout=5)
        waiter.join(timeout=5)

        assert calls == [1]
        assert results["owner"].state is BuildState.COMPILED
        assert results["waiter"].state is BuildState.REUSED
        assert results["waiter"].module is module
        assert cache.waiting(path) == 0
        assert not cache.in_flight(path)

    def test_no_waiters_without_build(self, cache, tmp_path):
        assert cache.waiting(tmp_path / "App.py") == 0

    def test_different_paths_do_not_block(self, cache, module, tmp_path):
        inner = []

        def outer_build():
            inner.append(cache.single_flight(tmp_path / "B.py", lambda: BuildResult(BuildState.COMPILED, module)))
            return BuildResult(BuildState.COMPILED, module)

        cache.single_flight(tmp_path / "A.py", outer_build)
        assert inner[0].compiled


class TestBuildResult:
    def test_as_reused(self, module):
        compiled = BuildResult(BuildState.COMPILED, module)
        reused = compiled.as_reused()
        assert reused.reused and reused.module is module
        assert compiled.compiled

    def test_from_cache(self, module, tmp_path):
        result = BuildResult.from_cache(module, tmp_path / "App.py")
        assert result.state is BuildState.REUSED
        assert result.output_path == tmp_path / "App.py"

    def test_display_name(self):
        assert BuildState.FAILED.display_name == "Failed"
