"""
Document domain model for the vectorization pipeline.

Represents one normalized source record (team game, player game, upcoming
game, injury report) with a deterministic identifier.

Dependencies: pydantic
System role: Input record for vocabulary build, encoding and upload
"""

from typing import Any

from pydantic import BaseModel, ConfigDict, Field, field_validator

MetadataValue = str | int | float | bool | list[str]


class Document(BaseModel):
    """Immutable source record ready for encoding and upload."""

    model_config = ConfigDict(frozen=True)

    id: str = Field(min_length=1, description="Deterministic record identifier")
    text: str = Field(min_length=1, description="Searchable record text")
    category: str = Field(
        min_length=1,
        description="Record category (team-game, player-game, upcoming, injury)",
    )
    metadata: dict[str, MetadataValue] = Field(
        default_factory=dict,
        description="Filterable metadata stored alongside the vector",
    )

    @field_validator("metadata", mode="before")
    @classmethod
    def drop_null_metadata(cls, value: Any) -> Any:
        """Index metadata cannot hold nulls, so None values are removed."""
        if isinstance(value, dict):
            return {key: val for key, val in value.items() if val is not None}
        return value

    @classmethod
    def from_record(cls, record: dict[str, Any]) -> "Document":
        """
        Build a Document from a flat record.

        Accepts either ``id`` or ``_id`` as the identifier key; every key other
        than id/text/category becomes metadata.

        Args:
            record: Flat record as produced by the data loaders

        Returns:
            Document: Validated document

        Raises:
            pydantic.ValidationError: When required fields are missing
        """
        reserved = {"id", "_id", "text", "category"}
        return cls(
            id=record.get("id") or record.get("_id") or "",
            text=record.get("text") or "",
            category=record.get("category") or "",
            metadata={key: val for key, val in record.items() if key not in reserved},
        )
