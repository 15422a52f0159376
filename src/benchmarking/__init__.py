"""Benchmarking: comparability analysis and arm's-length compliance."""

from .compliance import ArmLengthComplianceEvaluator
from .orchestrator import (
    ComparabilityOrchestrator,
    normalize_adjustment_types,
    summarize_adjustments,
)

__all__ = [
    "ArmLengthComplianceEvaluator",
    "ComparabilityOrchestrator",
    "normalize_adjustment_types",
    "summarize_adjustments",
]
