"""
Structured result of a root computation.
"""

from pydantic import BaseModel, ConfigDict, Field


class RootResult(BaseModel):
    """Root digest together with how it was produced."""

    model_config = ConfigDict(
        extra="forbid",
        frozen=True,
    )

    root: str = Field(
        ...,
        description="Merkle root as 64 lowercase hex characters",
        pattern=r"^[0-9a-f]{64}$",
    )
    mode: str = Field(
        ...,
        description="Traversal strategy used to compute the root",
    )
    leaf_count: int = Field(
        ...,
        ge=1,
        description="Number of leaves the root summarizes",
    )

    @classmethod
    def from_digest(cls, root: bytes, mode: str, leaf_count: int) -> "RootResult":
        return cls(root=root.hex(), mode=mode, leaf_count=leaf_count)
