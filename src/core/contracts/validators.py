"""
JSON Schema Contract Validators

Validates the engine's JSON contracts against the formal JSON Schema
documents in contracts/schema/ (Draft 2020-12, via jsonschema).

Schemas:
- comparability_request.json (tested party, comparable set, PLI, adjustments)
- comparability_analysis.json (ComparabilityAnalysisResult.to_contract())
"""

import json
from pathlib import Path
from typing import Any, Dict

import jsonschema
from jsonschema import Draft202012Validator, ValidationError


# =============================================================================
# SCHEMA LOADER
# =============================================================================


class SchemaLoader:
    """
    Loads JSON Schema files.

    Schemas are looked up in contracts/schema/ relative to the project root.
    """

    def __init__(self, schema_dir: Path | None = None):
        # Project root is 4 levels up from this file
        self._schema_dir = schema_dir or Path(__file__).parent.parent.parent.parent / "contracts" / "schema"
        if not self._schema_dir.exists():
            raise RuntimeError(f"Schema directory not found: {self._schema_dir}")

        self._schemas: Dict[str, Dict[str, Any]] = {}

    @property
    def schema_dir(self) -> Path:
        return self._schema_dir

    def load_schema(self, schema_name: str) -> Dict[str, Any]:
        """
        Load (and cache) a JSON Schema file.

        Args:
            schema_name: Schema name without extension (e.g. 'comparability_analysis')

        Returns:
            Schema as dict

        Raises:
            FileNotFoundError: If the schema file does not exist
            json.JSONDecodeError: If the file is not valid JSON
            ValueError: If the file is not a valid Draft 2020-12 schema
        """
        if schema_name in self._schemas:
            return self._schemas[schema_name]

        schema_path = self._schema_dir / f"{schema_name}.json"
        if not schema_path.exists():
            raise FileNotFoundError(f"Schema not found: {schema_path}")

        with open(schema_path, "r", encoding="utf-8") as f:
            schema = json.load(f)

        # Meta-validation
        try:
            Draft202012Validator.check_schema(schema)
        except jsonschema.SchemaError as e:
            raise ValueError(f"Invalid JSON Schema in {schema_name}.json: {e}")

        self._schemas[schema_name] = schema
        return schema


_SCHEMA_LOADER = SchemaLoader()


# =============================================================================
# CONTRACT VALIDATORS
# =============================================================================


class ContractValidator:
    """
    Base contract validator.

    Wraps a Draft 2020-12 validator for one schema.
    """

    def __init__(self, schema_name: str):
        self.schema_name = schema_name
        self.schema = _SCHEMA_LOADER.load_schema(schema_name)
        self.validator = Draft202012Validator(self.schema)

    def validate(self, data: Dict[str, Any]) -> None:
        """
        Validate data against the schema.

        Raises:
            ValidationError: If the data does not conform
        """
        self.validator.validate(data)

    def is_valid(self, data: Dict[str, Any]) -> bool:
        """True if data conforms to the schema."""
        return self.validator.is_valid(data)

    def iter_errors(self, data: Dict[str, Any]):
        """Iterate over every validation error."""
        return self.validator.iter_errors(data)


class ComparabilityRequestValidator(ContractValidator):
    """Validator for the comparability_request contract."""

    def __init__(self):
        super().__init__("comparability_request")


class ComparabilityAnalysisValidator(ContractValidator):
    """Validator for the comparability_analysis contract."""

    def __init__(self):
        super().__init__("comparability_analysis")


# =============================================================================
# CONVENIENCE FUNCTIONS
# =============================================================================


def validate_comparability_request(data: Dict[str, Any]) -> None:
    """
    Validate a comparability request.

    Raises:
        ValidationError: If the data does not conform
    """
    ComparabilityRequestValidator().validate(data)


def validate_comparability_analysis(data: Dict[str, Any]) -> None:
    """
    Validate a serialized ComparabilityAnalysisResult.

    Raises:
        ValidationError: If the data does not conform
    """
    ComparabilityAnalysisValidator().validate(data)


__all__ = [
    "SchemaLoader",
    "ContractValidator",
    "ComparabilityRequestValidator",
    "ComparabilityAnalysisValidator",
    "validate_comparability_request",
    "validate_comparability_analysis",
    "ValidationError",
]
