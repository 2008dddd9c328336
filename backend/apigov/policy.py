"""
Governance Policy Configuration.

Scoring weights and constants for the compliance score. Different
governance programs can override the defaults by loading a YAML policy:

    policy:
      id: strict-security
      category_weights:
        security: 40
      sensitivity: 12
"""

from __future__ import annotations

from pathlib import Path
from typing import Dict, Union

import yaml
from pydantic import BaseModel, Field, ValidationError, field_validator

from .errors import PolicyError
from .models import Category


DEFAULT_CATEGORY_WEIGHTS: Dict[str, float] = {
    Category.SECURITY.value: 30,
    Category.RESPONSES.value: 25,
    Category.NAMING.value: 20,
    Category.VERSIONING.value: 15,
}


class GovernancePolicy(BaseModel):
    """Category weights and severity constants used by the scoring engine."""

    id: str = "default"
    description: str = "Default API governance policy"
    category_weights: Dict[str, float] = Field(
        default_factory=lambda: dict(DEFAULT_CATEGORY_WEIGHTS)
    )
    default_weight: float = Field(default=10, ge=0)
    sensitivity: float = Field(default=10.0, gt=0)
    error_multiplier: float = Field(default=1.5, ge=0)
    warning_multiplier: float = Field(default=1.0, ge=0)

    @field_validator("category_weights")
    @classmethod
    def validate_weights(cls, weights: Dict[str, float]) -> Dict[str, float]:
        for category, weight in weights.items():
            if weight < 0:
                raise ValueError(f"weight for category '{category}' must be non-negative")
        # Partial overrides keep the defaults for unnamed categories
        merged = dict(DEFAULT_CATEGORY_WEIGHTS)
        merged.update(weights)
        return merged

    def weight_for(self, category: Union[Category, str, None]) -> float:
        """Weight of a category bucket; unknown buckets use the default weight."""
        if isinstance(category, Category):
            category = category.value
        return self.category_weights.get(category or Category.OTHER.value, self.default_weight)

    def to_yaml(self) -> str:
        return yaml.safe_dump({"policy": self.model_dump()}, default_flow_style=False, sort_keys=False)

    @classmethod
    def from_yaml(cls, yaml_content: str) -> "GovernancePolicy":
        """Load a policy from YAML content with a top-level ``policy`` section."""
        try:
            data = yaml.safe_load(yaml_content) or {}
        except yaml.YAMLError as e:
            raise PolicyError(f"Policy YAML parse error: {e}") from e

        if not isinstance(data, dict):
            raise PolicyError("Policy document must be a mapping")

        policy_data = data.get("policy", data)
        try:
            return cls(**policy_data)
        except (TypeError, ValidationError) as e:
            raise PolicyError(f"Invalid policy: {e}") from e

    @classmethod
    def from_file(cls, path: Path) -> "GovernancePolicy":
        """Load a policy from a file."""
        path = Path(path)
        if not path.exists():
            raise PolicyError(f"Policy file not found: {path}")
        with open(path, "r", encoding="utf-8") as f:
            return cls.from_yaml(f.read())
