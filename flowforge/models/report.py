"""Structural validation report."""

from pydantic import BaseModel
from pydantic.alias_generators import to_camel


class ValidationReport(BaseModel):
    """Outcome of validating one graph snapshot.

    Immutable; serialized with camelCase keys (`isValid`,
    `meaningfulNodeCount`) for the rendering client.
    """

    model_config = {"frozen": True, "alias_generator": to_camel, "populate_by_name": True}

    is_valid: bool
    errors: tuple[str, ...] = ()
    warnings: tuple[str, ...] = ()
    meaningful_node_count: int = 0

    def not_found_errors(self) -> list[str]:
        """Errors about edge endpoints that reference unknown node ids."""
        return [error for error in self.errors if error.endswith("not found")]
