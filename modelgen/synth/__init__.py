# modelgen/synth/__init__.py
"""
Contract synthesis: typed IR plus reference collection.

Usage:
    from modelgen.synth import ContractSynthesizer

    ir = ContractSynthesizer("App").synthesize(descriptors)
"""

from modelgen.synth.ir import BuildIR, ContractIR, MemberIR
from modelgen.synth.references import ReferenceCollector
from modelgen.synth.synthesizer import DEFAULT_NAME_PREFIX, ContractSynthesizer

__all__ = [
    "BuildIR",
    "ContractIR",
    "MemberIR",
    "ReferenceCollector",
    "ContractSynthesizer",
    "DEFAULT_NAME_PREFIX",
]
