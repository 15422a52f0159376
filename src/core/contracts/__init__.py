"""
Contract Validation Module

Validates the JSON contracts of the comparability engine.
"""

from .validators import (
    ComparabilityAnalysisValidator,
    ComparabilityRequestValidator,
    ContractValidator,
    SchemaLoader,
    validate_comparability_analysis,
    validate_comparability_request,
)

__all__ = [
    # Classes
    "SchemaLoader",
    "ContractValidator",
    "ComparabilityRequestValidator",
    "ComparabilityAnalysisValidator",
    # Functions
    "validate_comparability_request",
    "validate_comparability_analysis",
]
