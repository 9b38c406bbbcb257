"""Numeric tolerance settings shared by the geometry modules."""

from pydantic import BaseModel, Field


class ToleranceConfig(BaseModel):
    """Absolute + relative epsilon used for "equal", "on segment" and "parallel".

    The effective epsilon for a computation is
    ``absolute + relative * magnitude`` where magnitude is the largest
    absolute coordinate involved.
    """

    absolute: float = Field(
        default=1e-9, gt=0, description="Absolute distance tolerance in coordinate units"
    )
    relative: float = Field(
        default=1e-9, ge=0, description="Tolerance per unit of coordinate magnitude"
    )
    sliver_area: float = Field(
        default=1e-12, ge=0, description="Result rings at or below this area are dropped"
    )

    def scaled(self, magnitude: float) -> float:
        """Effective epsilon for coordinates of the given magnitude."""
        return self.absolute + self.relative * abs(magnitude)

    @classmethod
    def from_yaml(cls, yaml_content: str) -> "ToleranceConfig":
        """Load tolerance settings from YAML string."""
        import yaml
        data = yaml.safe_load(yaml_content) or {}
        return cls(**data)

    def merge_override(self, override: dict) -> "ToleranceConfig":
        """Copy with the given fields replaced, validated like a fresh config."""
        return self.model_validate({**self.model_dump(), **override})
