"""Render git blame status text from commit metadata and format templates."""

from .decorator import normalize_commit_info_tokens, parse_tokens, to_text_view
from .models import CommitParty, CommitRecord, RenderSettings, blank_commit

__all__ = [
    "CommitParty",
    "CommitRecord",
    "RenderSettings",
    "blank_commit",
    "normalize_commit_info_tokens",
    "parse_tokens",
    "to_text_view",
]

__version__ = "0.1.0"
