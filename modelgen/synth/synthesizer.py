# modelgen/synth/synthesizer.py
"""
Contract synthesizer.

Builds the contract IR for a set of component descriptors:

    descriptors -> candidate properties -> filter -> members -> ContractIR

Every backing class gets exactly one contract per synthesizer. A contract
is placed in the arena before its members are walked, so self-referential
and mutually-referential property types resolve to the in-progress entry.

Naming: ``<prefix><stem><TypeName>`` where the prefix defaults to
``IModel`` and is the enclosing contract's name for nested contracts.

Usage:
    synth = ContractSynthesizer("App", version="0.3.0")
    ir = synth.synthesize([ComponentDescriptor(Person)])
"""

from __future__ import annotations

from typing import Any, Callable, Dict, Iterable, List, Optional

from modelgen.contracts import ModelNodeEnabled, full_type_name
from modelgen.exceptions import ContractNameConflict
from modelgen.logging.logger import get_logger
from modelgen.logging.tags import SYNTH
from modelgen.markers import ClassName, ModelAbstractClass, ModelDisplayName, NullValue
from modelgen.reflection import (
    PropertyDescriptor,
    behave_like_value_type,
    candidate_properties,
    is_struct,
    make_nullable,
    strip_annotated,
    unwrap_optional,
)
from modelgen.synth.ir import BuildIR, ContractIR, MemberIR
from modelgen.synth.references import ReferenceCollector
from modelgen.translate.literals import quote
from modelgen.translate.translator import AttributeTranslator

logger = get_logger(__name__)

DEFAULT_NAME_PREFIX = "IModel"

PropertyFilterFn = Callable[[PropertyDescriptor], bool]
HeaderFn = Callable[[type, type, str], Optional[str]]


def _nested_type(tp: Any) -> Optional[type]:
    """The class a non-value member refers to, or None when it is not a class."""
    tp = unwrap_optional(strip_annotated(tp)[0])
    return tp if isinstance(tp, type) else None


class ContractSynthesizer:
    """
    Synthesizes contracts for one generated module.

    Args:
        stem: Output module stem, part of every generated name
        version: Generator version stamped into the IR
        collector: Reference collector (fresh per build)
        translator: Marker translator; defaults to the stock rules
        name_prefix: Prefix of top-level contract names
    """

    def __init__(
        self,
        stem: str,
        version: str = "",
        collector: Optional[ReferenceCollector] = None,
        translator: Optional[AttributeTranslator] = None,
        name_prefix: str = DEFAULT_NAME_PREFIX,
    ):
        self.stem = stem
        self.version = version
        self.collector = collector or ReferenceCollector()
        self.translator = translator or AttributeTranslator(self.collector.ref)
        self.name_prefix = name_prefix
        self._arena: Dict[type, ContractIR] = {}
        self._names: Dict[str, type] = {}
        self._contracts: List[ContractIR] = []

    # =========================================================================
    # Arena
    # =========================================================================

    @property
    def contracts(self) -> List[ContractIR]:
        return list(self._contracts)

    def get(self, cls: type) -> Optional[ContractIR]:
        return self._arena.get(cls)

    def __contains__(self, cls: object) -> bool:
        return cls in self._arena

    def contract_name(self, cls: type, name_prefix: Optional[str] = None) -> str:
        return f"{name_prefix or self.name_prefix}{self.stem}{cls.__name__}"

    # =========================================================================
    # Synthesis
    # =========================================================================

    def synthesize(self, descriptors: Iterable[Any]) -> BuildIR:
        """Contracts for every descriptor plus everything they reach."""
        for descriptor in descriptors:
            for tp in descriptor.reference_types:
                self.collector.ref(tp)
            if descriptor.component_type in self._arena:
                logger.debug(f"{SYNTH} {descriptor.component_type.__name__} already synthesized, skipping")
                continue
            self.create_contract(
                descriptor.component_type,
                descriptor.property_filter,
                descriptor.base_contract,
                descriptor.is_abstract,
                descriptor.root_base_contract,
            )

        annotated_ref = self.collector.typing_name("Annotated")
        return BuildIR(
            stem=self.stem,
            version=self.version,
            contracts=self.contracts,
            import_lines=self.collector.import_lines(),
            references=sorted(self.collector.references),
            annotated_ref=annotated_ref,
        )

    def create_contract(
        self,
        cls: type,
        property_filter: Optional[PropertyFilterFn] = None,
        base_contract: type = ModelNodeEnabled,
        is_abstract: bool = False,
        root_base_contract: Optional[type] = None,
        name_prefix: Optional[str] = None,
    ) -> ContractIR:
        name = self.contract_name(cls, name_prefix)
        owner = self._names.get(name)
        if owner is not None and owner is not cls:
            raise ContractNameConflict(name, owner, cls)
        self._names[name] = cls
        self.collector.reserve(name)
        # Backing classes are imported by the generated module.
        self.collector.ref(cls)

        is_root = name_prefix is None
        base = root_base_contract if is_root and root_base_contract is not None else base_contract

        header = [f"@{self.collector.ref(ClassName)}({quote(full_type_name(cls))})"]
        if is_abstract:
            header.append(f"@{self.collector.ref(ModelAbstractClass)}()")

        contract = ContractIR(
            backing_type=cls,
            name=name,
            base_ref=self.collector.ref(base),
            header=header,
            is_abstract=is_abstract,
            nested=not is_root,
        )
        self._arena[cls] = contract
        self._contracts.append(contract)
        logger.debug(f"{SYNTH} Contract {name} for {full_type_name(cls)}")

        emitted = set()
        for info in self._properties(cls, property_filter):
            if info.name in emitted:
                continue
            contract.members.append(self._member(info, contract, property_filter, base_contract))
            emitted.add(info.name)

        return contract

    def _properties(self, cls: type, property_filter: Optional[PropertyFilterFn]) -> List[PropertyDescriptor]:
        infos = candidate_properties(cls)
        if property_filter is None:
            return infos
        return [info for info in infos if property_filter(info)]

    def _member(
        self,
        info: PropertyDescriptor,
        contract: ContractIR,
        property_filter: Optional[PropertyFilterFn],
        base_contract: type,
    ) -> MemberIR:
        value_like = behave_like_value_type(info.property_type)
        nested = None if value_like else _nested_type(info.property_type)
        if nested is not None and nested not in self._arena:
            self.create_contract(nested, property_filter, base_contract, False, None, contract.name)

        return MemberIR(
            name=info.name,
            type_ref=self._type_ref(info, value_like, nested),
            writable=value_like,
            nested=not value_like,
            annotations=self.translator.translate_all(info),
        )

    def _type_ref(self, info: PropertyDescriptor, value_like: bool, nested: Optional[type]) -> str:
        tp = info.property_type
        if info.has_attribute(NullValue):
            return self.collector.ref(tp)
        if nested is not None:
            return self._arena[nested].name
        if not value_like:
            return self.collector.ref(tp)
        if tp is not str and not is_struct(tp):
            tp = make_nullable(tp)
        return self.collector.ref(tp)

    # =========================================================================
    # Standalone Snippets
    # =========================================================================

    def generated_empty_contracts_code(
        self,
        types: Iterable[type],
        base_type: type,
        header: Optional[HeaderFn] = None,
    ) -> str:
        """
        Empty contract declarations for ``types``.

        ``header(type, base_type, name)`` may return extra lines (for example
        a display name decorator) placed above each declaration.
        """
        blocks = []
        for tp in types:
            name = f"{self.name_prefix}{tp.__name__}"
            lines = []
            extra = header(tp, base_type, name) if header else None
            if extra:
                lines.append(extra)
            lines.append(f"class {name}({self.collector.ref(base_type)}):")
            lines.append("    pass")
            blocks.append("\n".join(lines))
        return "\n\n\n".join(blocks)

    def generated_display_name_code(self, name: str) -> str:
        return f"@{self.collector.ref(ModelDisplayName)}({quote(name)})"


__all__ = ["ContractSynthesizer", "DEFAULT_NAME_PREFIX"]
