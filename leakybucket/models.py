"""
State and configuration models for a leaky bucket.
"""

from typing import Any, Dict, Optional

from pydantic import BaseModel, ConfigDict, Field


class BucketConfig(BaseModel):
    """Per-bucket settings, immutable after construction."""

    model_config = ConfigDict(extra="ignore", frozen=True, allow_inf_nan=False)

    capacity: float = Field(default=10, gt=0, description="Maximum drops the bucket can hold")
    leak: float = Field(default=0.33, gt=0, description="Drops removed per elapsed second")


class BucketState(BaseModel):
    """The persisted record for one bucket key."""

    drops: float = Field(default=0.0, ge=0, description="Current accumulated load")
    time: Optional[float] = Field(default=None, description="Last time the bucket was touched")
    data: Any = Field(default=None, description="Caller payload, not interpreted by the bucket")

    @classmethod
    def from_record(cls, record: Optional[Dict[str, Any]]) -> "BucketState":
        """Build a state from a stored record, treating a missing record as empty."""
        if not record:
            return cls()
        return cls.model_validate(record)

    def to_record(self) -> Dict[str, Any]:
        """Mapping written to storage."""
        return {"drops": self.drops, "time": self.time, "data": self.data}
