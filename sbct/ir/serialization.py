"""
IR Serialization — JSON import/export for transform results.
"""

from sbct.ir.schema import TransformResult


def to_json(result: TransformResult, indent: int = 2) -> str:
    """Serialize a TransformResult to JSON string."""
    return result.model_dump_json(indent=indent)


def from_json(json_str: str) -> TransformResult:
    """Deserialize a TransformResult from JSON string."""
    return TransformResult.model_validate_json(json_str)
