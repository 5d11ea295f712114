# modelgen/build/cache.py
"""
Caller-owned build cache.

Holds the process-lifetime state shared between builds:

- modules memoized by output name
- disk-presence flags per output path
- modules already loaded from a given artifact path
- the in-flight table that makes compilation single-flight per output path

The owner constructs one cache per host and calls ``clear()`` on teardown.
Tests simply create a fresh instance.
"""

from __future__ import annotations

import threading
from concurrent.futures import Future
from pathlib import Path
from types import ModuleType
from typing import Callable, Dict, Optional

from modelgen.build.types import BuildResult
from modelgen.logging.logger import get_logger
from modelgen.logging.tags import CACHE

logger = get_logger(__name__)


class BuildCache:
    """Thread-safe store of compiled modules and build coordination."""

    def __init__(self):
        self._lock = threading.Lock()
        self._modules: Dict[str, ModuleType] = {}
        self._file_exists: Dict[Path, bool] = {}
        self._loaded_paths: Dict[Path, ModuleType] = {}
        self._inflight: Dict[Path, Future] = {}
        self._waiters: Dict[Path, int] = {}

    # =========================================================================
    # Modules
    # =========================================================================

    def get_module(self, name: str) -> Optional[ModuleType]:
        with self._lock:
            return self._modules.get(name)

    def put_module(self, name: str, module: ModuleType) -> None:
        with self._lock:
            self._modules[name] = module

    def has_module(self, name: str) -> bool:
        with self._lock:
            return name in self._modules

    def get_loaded(self, path: Path) -> Optional[ModuleType]:
        with self._lock:
            return self._loaded_paths.get(Path(path))

    def put_loaded(self, path: Path, module: ModuleType) -> None:
        with self._lock:
            self._loaded_paths[Path(path)] = module

    def forget_path(self, path: Path) -> None:
        """Drop everything recorded about the artifact at ``path``."""
        with self._lock:
            self._loaded_paths.pop(Path(path), None)
            self._file_exists[Path(path)] = False

    # =========================================================================
    # Disk Presence
    # =========================================================================

    def file_exists(self, path: Path) -> bool:
        """Check the disk and record the answer."""
        exists = Path(path).is_file()
        with self._lock:
            self._file_exists[Path(path)] = exists
        return exists

    def known_file_exists(self, path: Path) -> Optional[bool]:
        """Last recorded answer for ``path``, or None if never checked."""
        with self._lock:
            return self._file_exists.get(Path(path))

    # =========================================================================
    # Single Flight
    # =========================================================================

    def single_flight(self, path: Path, build: Callable[[], BuildResult]) -> BuildResult:
        """
        Run ``build`` unless a build for ``path`` is already running.

        Callers that arrive while a build is in flight block until it
        finishes and get its module (as REUSED) or its exception.
        """
        key = Path(path).resolve()
        with self._lock:
            future = self._inflight.get(key)
            owner = future is None
            if owner:
                future = Future()
                self._inflight[key] = future
            else:
                self._waiters[key] = self._waiters.get(key, 0) + 1

        if not owner:
            logger.debug(f"{CACHE} Waiting for in-flight build of {path}")
            try:
                return future.result().as_reused()
            finally:
                with self._lock:
                    remaining = self._waiters.pop(key) - 1
                    if remaining:
                        self._waiters[key] = remaining

        try:
            result = build()
        except BaseException as e:
            future.set_exception(e)
            raise
        else:
            future.set_result(result)
            return result
        finally:
            with self._lock:
                self._inflight.pop(key, None)

    def in_flight(self, path: Path) -> bool:
        with self._lock:
            return Path(path).resolve() in self._inflight

    def waiting(self, path: Path) -> int:
        """Callers currently blocked on the in-flight build of ``path``."""
        with self._lock:
            return self._waiters.get(Path(path).resolve(), 0)

    # =========================================================================
    # Teardown
    # =========================================================================

    def clear(self) -> None:
        with self._lock:
            count = len(self._modules)
            self._modules.clear()
            self._file_exists.clear()
            self._loaded_paths.clear()
        logger.debug(f"{CACHE} Cleared {count} cached module(s)")

    def __len__(self) -> int:
        with self._lock:
            return len(self._modules)


__all__ = ["BuildCache"]
