"""Pydantic models for commit records and render settings."""

from __future__ import annotations

from pydantic import BaseModel, ConfigDict, Field

from .constants import BLANK_HASH, DEFAULT_MESSAGE_FORMAT, DEFAULT_NO_COMMIT_MESSAGE, MAX_TIMESTAMP


class CommitParty(BaseModel):
    name: str = ""
    mail: str = ""
    timestamp: int = Field(
        default=0,
        ge=0,
        le=MAX_TIMESTAMP,
        description="Unix timestamp in seconds",
    )
    tz: str = ""


class CommitRecord(BaseModel):
    hash: str = Field(..., min_length=1, max_length=64)
    author: CommitParty = Field(default_factory=CommitParty)
    committer: CommitParty = Field(default_factory=CommitParty)
    summary: str = ""
    filename: str = ""
    generated: bool = False

    @property
    def is_blank(self) -> bool:
        """Return whether this record stands for a line with no commit yet."""
        return self.generated or self.hash == BLANK_HASH


def blank_commit(filename: str = "") -> CommitRecord:
    """Build the placeholder record used for uncommitted lines."""
    return CommitRecord(
        hash=BLANK_HASH,
        author=CommitParty(),
        committer=CommitParty(),
        summary="",
        filename=filename,
        generated=True,
    )


class RenderSettings(BaseModel):
    model_config = ConfigDict(extra="forbid")

    message_format: str = DEFAULT_MESSAGE_FORMAT
    message_no_commit: str = DEFAULT_NO_COMMIT_MESSAGE
