"""License template models."""
from __future__ import annotations

from pydantic import BaseModel, Field

# Normalized word -> index of its first occurrence in the token sequence
WordSet = dict[str, int]


class LicenseTemplate(BaseModel):
    """A known license text with its precomputed word set.

    Templates are immutable once loaded. Two templates may carry nearly
    identical bodies; they are told apart by scoring alone.
    """

    model_config = {"extra": "forbid", "frozen": True}

    title: str = Field(default="", description="Human readable license title")
    nickname: str = Field(default="", description="Short nickname, if any")
    spdx_id: str = Field(default="", description="SPDX license identifier")
    text: str = Field(default="", description="Template body text")
    words: WordSet = Field(
        default_factory=dict,
        description="Normalized words mapped to their first token position",
    )

    @property
    def display_name(self) -> str:
        """Title, falling back to the SPDX identifier."""
        return self.title or self.spdx_id
