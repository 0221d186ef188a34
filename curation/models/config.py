"""
Curation configuration: pool, heuristic filter, training, and feed parameters.

CurationConfig defaults are defined here. The backend may pass a dict
(e.g. from a JSON file named by CURATION_CONFIG_PATH); from_dict() merges it
with these defaults.
"""

from typing import Dict, Optional

from pydantic import BaseModel, model_validator


class CurationConfig(BaseModel):
    """Configuration for pool management, filtering, and the recommendation model."""

    # -------------------------------------------------------------------------
    # Content Pool
    # -------------------------------------------------------------------------

    # Max entries kept in the pool. After each admission batch the oldest
    # entries (by insertion order) are deleted until exactly this many remain.
    max_pool_size: int = 3000

    # Search tokens shorter than this are dropped before searching.
    min_search_term_length: int = 2

    # -------------------------------------------------------------------------
    # Heuristic Filter
    # -------------------------------------------------------------------------

    # Items scoring below this are treated as inauthentic.
    authenticity_threshold: float = 0.4

    # -------------------------------------------------------------------------
    # Recommendation Model training
    # -------------------------------------------------------------------------

    # Training needs at least this many labeled examples of each class.
    min_positive_samples: int = 2
    min_negative_samples: int = 2

    learning_rate: float = 0.1
    epochs: int = 500

    # Every N epochs, stop early when the mean log-likelihood is above the floor.
    early_exit_check_interval: int = 100
    early_exit_log_likelihood: float = -0.1

    # -------------------------------------------------------------------------
    # Feed (random recommendations)
    # candidates sampled = min(limit * feed_candidate_multiplier, feed_candidate_cap)
    # -------------------------------------------------------------------------

    feed_candidate_multiplier: int = 3
    feed_candidate_cap: int = 300

    @model_validator(mode="after")
    def values_in_range(self):
        if not 0.0 <= self.authenticity_threshold <= 1.0:
            raise ValueError(
                f"authenticity_threshold must be within [0, 1], got {self.authenticity_threshold}"
            )
        for name in ("max_pool_size", "epochs", "feed_candidate_multiplier", "feed_candidate_cap"):
            if getattr(self, name) <= 0:
                raise ValueError(f"{name} must be positive, got {getattr(self, name)}")
        if self.learning_rate <= 0:
            raise ValueError(f"learning_rate must be positive, got {self.learning_rate}")
        if self.min_positive_samples < 1 or self.min_negative_samples < 1:
            raise ValueError("training needs at least one sample of each class")
        return self

    @classmethod
    def from_dict(cls, config_dict: Dict) -> "CurationConfig":
        """Create config from dictionary (e.g., loaded from JSON)."""
        flat = {}
        if "pool" in config_dict:
            pool = config_dict["pool"]
            if "max_size" in pool:
                flat["max_pool_size"] = pool["max_size"]
            if "min_search_term_length" in pool:
                flat["min_search_term_length"] = pool["min_search_term_length"]
        if "filter" in config_dict:
            flt = config_dict["filter"]
            if "threshold" in flt:
                flat["authenticity_threshold"] = flt["threshold"]
        if "training" in config_dict:
            flat.update(config_dict["training"])
        if "feed" in config_dict:
            feed = config_dict["feed"]
            if "candidate_multiplier" in feed:
                flat["feed_candidate_multiplier"] = feed["candidate_multiplier"]
            if "candidate_cap" in feed:
                flat["feed_candidate_cap"] = feed["candidate_cap"]
        # Flat keys are accepted too
        flat.update({k: v for k, v in config_dict.items() if not isinstance(v, dict)})
        allowed = set(cls.model_fields)
        filtered = {k: v for k, v in flat.items() if k in allowed}
        return cls.model_validate(filtered)


DEFAULT_CONFIG = CurationConfig()


def resolve_config(config: Optional["CurationConfig"]) -> "CurationConfig":
    """Return config or DEFAULT_CONFIG when none is provided."""
    return config if config is not None else DEFAULT_CONFIG
