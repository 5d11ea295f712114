# modelgen/build/backend.py
"""
Python source backend.

Renders a BuildIR to module source and turns that source into a live
module. Compilation runs in three steps, each of which contributes
diagnostics:

    1. every module reference must be importable
    2. the source must compile
    3. the module body must execute (imports, decorators, class bodies)

Runtime mode persists the source at the output path and loads it from
there; design-time mode executes it in memory only.

Usage:
    backend = PythonSourceBackend()
    source = backend.render(ir)
    module = backend.compile(source, ir.references, path, "modelgen_generated_app", persist=True)
"""

from __future__ import annotations

import importlib.util
import re
import sys
import traceback
from pathlib import Path
from types import ModuleType
from typing import Iterable, List, Optional

from modelgen.exceptions import CompileFailure
from modelgen.logging.logger import get_logger
from modelgen.logging.tags import COMPILE
from modelgen.synth.ir import BuildIR, ContractIR, MemberIR
from modelgen.translate.literals import quote

logger = get_logger(__name__)

VERSION_ATTR = "__generator_version__"

_VERSION_RE = re.compile(rf"^{VERSION_ATTR}\s*=\s*([\"'])(?P<version>[^\"']*)\1", re.MULTILINE)

# The stamp sits in the module header; no need to read whole artifacts.
_STAMP_WINDOW = 4096

_BUILTINS_ALIAS = "_builtins"


# =============================================================================
# Version Stamp
# =============================================================================


def read_version_stamp(path: Path) -> Optional[str]:
    """Version recorded in an artifact, without executing it."""
    try:
        with open(path, encoding="utf-8") as f:
            head = f.read(_STAMP_WINDOW)
    except (OSError, UnicodeDecodeError):
        return None
    match = _VERSION_RE.search(head)
    return match.group("version") if match else None


def version_match(path: Path, version: str) -> bool:
    return read_version_stamp(path) == version


# =============================================================================
# Backend
# =============================================================================


class PythonSourceBackend:
    """Renders contracts as Python classes and executes them as a module."""

    indent = "    "

    # -------------------------------------------------------------------------
    # Rendering
    # -------------------------------------------------------------------------

    def render(self, ir: BuildIR) -> str:
        # The stamp precedes the imports so it stays inside the read window.
        lines = [
            "# Generated by modelgen. Do not edit.",
            "from __future__ import annotations",
            "",
            f"{VERSION_ATTR} = {quote(ir.version)}",
            "",
            *ir.import_lines,
        ]
        if any(self._shadows_property(c) for c in ir.contracts):
            lines.append(f"import builtins as {_BUILTINS_ALIAS}")
        for contract in ir.contracts:
            lines.extend(["", ""])
            lines.extend(self.render_contract(contract, ir.annotated_ref))
        return "\n".join(lines) + "\n"

    @staticmethod
    def _shadows_property(contract: ContractIR) -> bool:
        """A read-only member named ``property`` rebinds the decorator in the class body."""
        return any(not m.writable and m.name == "property" for m in contract.members)

    def render_contract(self, contract: ContractIR, annotated_ref: str = "Annotated") -> List[str]:
        lines = list(contract.header)
        lines.append(f"class {contract.name}({contract.base_ref}):")
        if not contract.members:
            lines.append(f"{self.indent}pass")
            return lines

        decorator = f"{_BUILTINS_ALIAS}.property" if self._shadows_property(contract) else "property"
        for member in contract.members:
            lines.extend(self.render_member(member, annotated_ref, decorator))
        return lines

    def render_member(
        self,
        member: MemberIR,
        annotated_ref: str = "Annotated",
        decorator: str = "property",
    ) -> List[str]:
        type_text = member.type_ref
        if member.annotations:
            type_text = f"{annotated_ref}[{type_text}, {', '.join(member.annotations)}]"

        if member.writable:
            return [f"{self.indent}{member.name}: {type_text}"]
        return [
            "",
            f"{self.indent}@{decorator}",
            f"{self.indent}def {member.name}(self) -> {type_text}: ...",
        ]

    # -------------------------------------------------------------------------
    # Compilation
    # -------------------------------------------------------------------------

    def compile(
        self,
        source: str,
        references: Iterable[str],
        output_path: Path,
        module_name: str,
        persist: bool = True,
    ) -> ModuleType:
        """
        Compile ``source`` into a module registered as ``module_name``.

        Raises:
            CompileFailure: With every diagnostic found, the source and the path
        """
        diagnostics = self.check_references(references, output_path)
        code = None
        try:
            code = compile(source, str(output_path), "exec")
        except SyntaxError as e:
            diagnostics.append(self._diagnostic(output_path, e.lineno or 1, e.offset or 1, e.msg))

        if diagnostics:
            raise CompileFailure(diagnostics, source, output_path)

        if persist:
            output_path.parent.mkdir(parents=True, exist_ok=True)
            output_path.write_text(source, encoding="utf-8")
            logger.debug(f"{COMPILE} Wrote {output_path}")

        try:
            return self._execute(code, source, output_path, module_name, from_file=persist)
        except CompileFailure:
            if persist:
                output_path.unlink(missing_ok=True)
            raise

    def load(self, output_path: Path, module_name: str) -> ModuleType:
        """Load a persisted artifact."""
        source = output_path.read_text(encoding="utf-8")
        try:
            code = compile(source, str(output_path), "exec")
        except SyntaxError as e:
            raise CompileFailure(
                [self._diagnostic(output_path, e.lineno or 1, e.offset or 1, e.msg)], source, output_path
            ) from e
        return self._execute(code, source, output_path, module_name, from_file=True)

    def check_references(self, references: Iterable[str], output_path: Path) -> List[str]:
        diagnostics = []
        for name in sorted(set(references)):
            if name in sys.modules:
                continue
            try:
                found = importlib.util.find_spec(name) is not None
            except (ImportError, ValueError):
                found = False
            if not found:
                diagnostics.append(self._diagnostic(output_path, 1, 1, f"Cannot resolve module reference '{name}'"))
        return diagnostics

    def _execute(self, code, source: str, output_path: Path, module_name: str, from_file: bool) -> ModuleType:
        if from_file:
            spec = importlib.util.spec_from_file_location(module_name, str(output_path))
            if spec is None:
                raise CompileFailure(
                    [self._diagnostic(output_path, 1, 1, "Cannot create module spec")], source, output_path
                )
            module = importlib.util.module_from_spec(spec)
        else:
            module = ModuleType(module_name)

        previous = sys.modules.get(module_name)
        sys.modules[module_name] = module
        try:
            exec(code, module.__dict__)
        except Exception as e:
            if previous is not None:
                sys.modules[module_name] = previous
            else:
                sys.modules.pop(module_name, None)
            line = self._failing_line(e, output_path)
            message = f"{type(e).__name__}: {e}"
            raise CompileFailure([self._diagnostic(output_path, line, 1, message)], source, output_path) from e

        logger.debug(f"{COMPILE} Loaded {module_name} from {'disk' if from_file else 'memory'}")
        return module

    @staticmethod
    def _failing_line(error: BaseException, output_path: Path) -> int:
        line = 1
        for frame in traceback.extract_tb(error.__traceback__):
            if frame.filename == str(output_path) and frame.lineno:
                line = frame.lineno
        return line

    @staticmethod
    def _diagnostic(output_path: Path, line: int, column: int, message: str) -> str:
        return f"{output_path}({line},{column}): error: {message}"


__all__ = [
    "PythonSourceBackend",
    "VERSION_ATTR",
    "read_version_stamp",
    "version_match",
]
