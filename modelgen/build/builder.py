# modelgen/build/builder.py
"""
Contract builder.

Drives one build request through the cache state machine:

    cleanup -> disk reuse -> memory reuse -> synthesize + compile

Terminal states are REUSED, COMPILED and FAILED (raised as CompileFailure).
A failed build leaves nothing behind: no memoized module, no artifact.

Usage:
    from modelgen.build import BuildCache, ContractBuilder, ComponentDescriptor

    cache = BuildCache()
    builder = ContractBuilder(cache, BuildSettings(runtime_mode=True))
    result = builder.build([ComponentDescriptor(Person)], "out/App.py")
    result.module.IModelAppPerson
"""

from __future__ import annotations

import re
from pathlib import Path
from types import ModuleType
from typing import Iterable, List, Optional, Union

from modelgen import __version__
from modelgen.build.backend import VERSION_ATTR, PythonSourceBackend, version_match
from modelgen.build.cache import BuildCache
from modelgen.build.types import BuildArtifact, BuildResult, BuildState, ComponentDescriptor
from modelgen.config.schema import BuildSettings
from modelgen.core.paths import ModelgenPaths
from modelgen.exceptions import CompileFailure
from modelgen.logging.logger import get_logger
from modelgen.logging.tags import BUILD
from modelgen.synth.references import ReferenceCollector
from modelgen.synth.synthesizer import ContractSynthesizer
from modelgen.translate.registry import TranslationRegistry
from modelgen.translate.translator import AttributeTranslator

logger = get_logger(__name__)

MODULE_PREFIX = "modelgen_generated_"


def output_stem(output_path: Path) -> str:
    """Identifier-safe stem of an output path, used in generated names."""
    stem = re.sub(r"\W", "_", Path(output_path).stem)
    if not stem or stem[0].isdigit():
        stem = f"_{stem}"
    return stem


def module_name_for(output_path: Path) -> str:
    return f"{MODULE_PREFIX}{output_stem(output_path)}"


class ContractBuilder:
    """
    Builds (or reuses) the module of generated contracts for an output path.

    Args:
        cache: Caller-owned cache shared by every build of the host
        settings: Mode flags
        backend: Renders and compiles the IR
        version: Generator version stamped into artifacts
        registry: Translation rules; defaults to the stock registry
    """

    def __init__(
        self,
        cache: Optional[BuildCache] = None,
        settings: Optional[BuildSettings] = None,
        backend: Optional[PythonSourceBackend] = None,
        version: Optional[str] = None,
        registry: Optional[TranslationRegistry] = None,
    ):
        self.cache = cache if cache is not None else BuildCache()
        self.settings = settings or BuildSettings()
        self.backend = backend or PythonSourceBackend()
        self.version = version or __version__
        self.registry = registry

    def default_output_path(self, name: str) -> Path:
        return ModelgenPaths.default_output_path(name, self.version, self.settings.base_dir)

    # =========================================================================
    # Build
    # =========================================================================

    def build(
        self,
        descriptors: Iterable[ComponentDescriptor],
        output_path: Union[str, Path],
    ) -> BuildResult:
        """
        Module of contracts for ``descriptors`` at ``output_path``.

        Raises:
            CompileFailure: The generated source did not compile or load
        """
        path = Path(output_path)
        items = list(descriptors)
        return self.cache.single_flight(path, lambda: self._build(items, path))

    def _build(self, descriptors: List[ComponentDescriptor], path: Path) -> BuildResult:
        settings = self.settings
        module_name = module_name_for(path)

        self._cleanup(path)

        exists = self.cache.file_exists(path)
        load_from_cache = settings.load_from_cache or (settings.runtime_mode and exists)
        matches = exists and version_match(path, self.version)
        logger.debug(
            f"{BUILD} {path.name}: exists={exists} load_from_cache={load_from_cache} "
            f"runtime_mode={settings.runtime_mode} version_match={matches}"
        )

        if not settings.force_rebuild and load_from_cache and matches:
            module = self._load(path, module_name)
            if module is not None:
                logger.info(f"{BUILD} {path.name}: {BuildState.REUSED.display_name} from disk")
                return BuildResult(BuildState.REUSED, module, output_path=path)

        if not settings.force_rebuild and not settings.runtime_mode:
            module = self.cache.get_module(module_name)
            if module is not None:
                logger.info(f"{BUILD} {path.name}: {BuildState.REUSED.display_name} from memory")
                return BuildResult(BuildState.REUSED, module, output_path=path)

        return self._compile(descriptors, path, module_name)

    def _cleanup(self, path: Path) -> None:
        """Delete a stale artifact when the host asks for it."""
        settings = self.settings
        if not settings.cleanup_enabled or not self.cache.file_exists(path):
            return
        if version_match(path, self.version) and not settings.dev_machine:
            return

        try:
            path.unlink()
        except OSError as e:
            logger.warning(f"{BUILD} Could not delete stale artifact {path}: {e}")
            return
        self.cache.forget_path(path)
        logger.info(f"{BUILD} Deleted stale artifact {path}")

    def _load(self, path: Path, module_name: str) -> Optional[ModuleType]:
        loaded = self.cache.get_loaded(path)
        if loaded is not None and getattr(loaded, VERSION_ATTR, None) == self.version:
            return loaded

        try:
            module = self.backend.load(path, module_name)
        except CompileFailure as e:
            logger.warning(f"{BUILD} Cached artifact {path} failed to load, rebuilding: {e}")
            return None

        self.cache.put_loaded(path, module)
        self.cache.put_module(module_name, module)
        return module

    def _compile(self, descriptors: List[ComponentDescriptor], path: Path, module_name: str) -> BuildResult:
        settings = self.settings
        collector = ReferenceCollector()
        translator = AttributeTranslator(collector.ref, self.registry)
        synthesizer = ContractSynthesizer(
            output_stem(path),
            self.version,
            collector=collector,
            translator=translator,
            name_prefix=settings.name_prefix,
        )

        ir = synthesizer.synthesize(descriptors)
        source = self.backend.render(ir)
        path.parent.mkdir(parents=True, exist_ok=True)

        try:
            module = self.backend.compile(
                source, ir.references, path, module_name, persist=settings.runtime_mode
            )
        except CompileFailure as e:
            logger.error(
                f"{BUILD} {path.name}: {BuildState.FAILED.display_name} "
                f"with {len(e.diagnostics)} diagnostic(s)"
            )
            raise

        self.cache.put_module(module_name, module)
        if settings.runtime_mode:
            self.cache.put_loaded(path, module)
            self.cache.file_exists(path)

        logger.info(
            f"{BUILD} {path.name}: {BuildState.COMPILED.display_name} "
            f"{len(ir.contracts)} contract(s)"
        )
        artifact = BuildArtifact(
            source=source,
            references=set(ir.references),
            output_path=path,
            version=self.version,
            module_name=module_name,
        )
        return BuildResult(BuildState.COMPILED, module, artifact, output_path=path)


__all__ = ["ContractBuilder", "module_name_for", "output_stem", "MODULE_PREFIX"]
