"""Aggregation configuration.

AggregationConfig is a Pydantic model for the knobs that decide how the
facade reacts to per-node mapping failures and merge conflicts.
"""

from __future__ import annotations

from typing import Literal

from pydantic import BaseModel


class AggregationConfig(BaseModel):
    """Configuration for InfoAggregator."""

    log_responses: bool = False
    coercion_errors: Literal["skip", "raise"] = "skip"
    drop_conflicting_groups: bool = True
