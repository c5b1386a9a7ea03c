"""Pydantic models for items and claims."""

from typing import Any, List

from pydantic import BaseModel, Field, TypeAdapter, field_validator


class Claim(BaseModel):
    """A claimer's reservation of the half-open range [claim_start, claim_end)."""

    claimer: str
    claim_start: int
    claim_end: int


class Item(BaseModel):
    """A trackable goal with a numeric target and current progress."""

    name: str
    target: int = Field(default=0, ge=0)
    gathered: int = 0
    claims: List[Claim] = Field(default_factory=list)

    @field_validator("claims", mode="before")
    def null_claims(cls, v: Any) -> Any:
        # Seed tooling writes "claims": null
        return [] if v is None else v

    @property
    def remaining(self) -> int:
        return max(0, self.target - self.gathered)

    def claim_for(self, claimer: str) -> "Claim | None":
        for claim in self.claims:
            if claim.claimer == claimer:
                return claim
        return None


ItemList = TypeAdapter(List[Item])


def dump_items(items: List[Item]) -> List[dict]:
    """Plain JSON-ready representation of a collection, in order."""
    return [item.model_dump() for item in items]
