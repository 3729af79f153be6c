"""
Sparse vector model.

Parallel index/value sequences holding only the nonzero TF-IDF weights of a
document.

Dependencies: pydantic
System role: Payload for the sparse index and for sparse queries
"""

from pydantic import BaseModel, ConfigDict, Field, model_validator


class SparseVector(BaseModel):
    """Sparse vector as positionally paired indices and values."""

    model_config = ConfigDict(frozen=True)

    indices: tuple[int, ...] = Field(default=(), description="Vocabulary indices")
    values: tuple[float, ...] = Field(default=(), description="Weights paired with indices")

    @model_validator(mode="after")
    def check_pairing(self) -> "SparseVector":
        """Reject vectors whose indices and values do not line up."""
        if len(self.indices) != len(self.values):
            raise ValueError(
                f"indices and values differ in length: {len(self.indices)} != {len(self.values)}"
            )
        if len(set(self.indices)) != len(self.indices):
            raise ValueError("indices must be unique within a sparse vector")
        if any(index < 0 for index in self.indices):
            raise ValueError("indices must be non-negative")
        return self

    @property
    def is_empty(self) -> bool:
        """True when the vector has no nonzero entries."""
        return not self.indices

    def to_payload(self) -> dict[str, list]:
        """Render as the ``{indices, values}`` dict the index service accepts."""
        return {"indices": list(self.indices), "values": list(self.values)}
