"""Adjustments: comparability adjustment calculators and the materiality gate.

Calculators compute a signed margin adjustment (fraction) per adjustment
type; the MaterialityGate decides which of them enter the adjusted margin.
"""

from .materiality import MaterialityGate, ReasonablenessCheck
from .parameters import get_pli_threshold, required_documentation

__all__ = [
    "MaterialityGate",
    "ReasonablenessCheck",
    "get_pli_threshold",
    "required_documentation",
]
