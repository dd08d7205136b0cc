"""Turn a commit record and a format template into status text."""

from __future__ import annotations

import logging
import re
from collections.abc import Callable, Mapping
from dataclasses import dataclass
from datetime import datetime, timezone
from typing import Any

from .ago import from_timestamp, to_date_text
from .constants import DEFAULT_HASH_LENGTH, DEFAULT_NO_COMMIT_MESSAGE, DEFAULT_SUMMARY_LENGTH
from .models import CommitRecord
from .tokens import LiteralPiece, scan

logger = logging.getLogger(__name__)

LEADING_INTEGER_PATTERN = re.compile(r"^\s*([+-]?\d+)")

Binding = Callable[[str], str]
InfoTokens = Mapping[str, Binding]

TOKEN_NAMES = (
    "author.mail",
    "author.name",
    "author.timestamp",
    "author.tz",
    "author.date",
    "commit.hash",
    "commit.hash_short",
    "commit.summary",
    "committer.mail",
    "committer.name",
    "committer.timestamp",
    "committer.tz",
    "committer.date",
    "time.ago",
    "time.c_ago",
    "time.from",
    "time.c_from",
)


@dataclass(frozen=True)
class ValueBinding:
    """Binding that answers every request with the same text."""

    value: str

    def __call__(self, parameter: str = "") -> str:
        return self.value


@dataclass(frozen=True)
class ShortnessBinding:
    """Binding that returns a leading slice of ``target``.

    The parameter is read like an integer prefix (``"5abc"`` means 5). An empty
    parameter uses ``fallback_length``; one without a numeric prefix yields
    ``""``.
    """

    target: str
    fallback_length: str

    def __call__(self, parameter: str = "") -> str:
        cutoff = _parse_length(parameter or self.fallback_length)
        if cutoff is None or cutoff <= 0:
            return ""
        return self.target[:cutoff]


def _parse_length(value: str) -> int | None:
    match = LEADING_INTEGER_PATTERN.match(value or "")
    if match is None:
        return None
    return int(match.group(1))


def normalize_commit_info_tokens(
    commit: CommitRecord,
    now: datetime | None = None,
) -> dict[str, Binding]:
    """Build the binding table for one commit record."""
    current = now or datetime.now(timezone.utc)
    author_time = from_timestamp(commit.author.timestamp)
    committer_time = from_timestamp(commit.committer.timestamp)

    ago = ValueBinding(to_date_text(current, author_time))
    c_ago = ValueBinding(to_date_text(current, committer_time))

    return {
        "author.mail": ValueBinding(commit.author.mail),
        "author.name": ValueBinding(commit.author.name),
        "author.timestamp": ValueBinding(str(commit.author.timestamp)),
        "author.tz": ValueBinding(commit.author.tz),
        "author.date": ValueBinding(author_time.date().isoformat()),
        "commit.hash": ValueBinding(commit.hash),
        "commit.hash_short": ShortnessBinding(commit.hash, DEFAULT_HASH_LENGTH),
        "commit.summary": ShortnessBinding(commit.summary, DEFAULT_SUMMARY_LENGTH),
        "committer.mail": ValueBinding(commit.committer.mail),
        "committer.name": ValueBinding(commit.committer.name),
        "committer.timestamp": ValueBinding(str(commit.committer.timestamp)),
        "committer.tz": ValueBinding(commit.committer.tz),
        "committer.date": ValueBinding(committer_time.date().isoformat()),
        "time.ago": ago,
        "time.c_ago": c_ago,
        "time.from": ago,
        "time.c_from": c_ago,
    }


def run_key(tokens: InfoTokens, token: str, value: str) -> str:
    """Resolve ``token`` against ``tokens``; unknown names echo themselves."""
    binding = tokens.get(token)
    if binding is not None:
        return binding(value)

    logger.debug("Unknown token '%s' echoed back verbatim.", token)
    return token


def modify(value: str, modifier: str) -> str:
    if modifier == "u":
        return value.upper()
    if modifier == "l":
        return value.lower()
    if modifier:
        return f"{value}|{modifier}"
    return value


def parse_tokens(target: Any, info_tokens: InfoTokens) -> str:
    """Render ``target`` by resolving each token piece in source order."""
    if not isinstance(target, str):
        return ""

    rendered: list[str] = []
    for piece in scan(target):
        if isinstance(piece, LiteralPiece):
            rendered.append(piece.text)
        else:
            token = piece.token
            new_value = run_key(info_tokens, token.function, token.parameter)
            rendered.append(modify(new_value, token.modifier))
    return "".join(rendered)


def to_text_view(
    commit: CommitRecord,
    message_format: Any,
    no_commit_message: str | None = DEFAULT_NO_COMMIT_MESSAGE,
    now: datetime | None = None,
) -> str:
    """Render the status text for ``commit``.

    Blank commits skip the template and return ``no_commit_message`` (or the
    built-in default when it is empty). A non-string format renders as ``""``,
    and so does an empty one.
    """
    if commit.is_blank:
        logger.debug("Blank commit for '%s'; using no-commit message.", commit.filename)
        return no_commit_message or DEFAULT_NO_COMMIT_MESSAGE

    if not isinstance(message_format, str):
        return ""

    return parse_tokens(message_format, normalize_commit_info_tokens(commit, now))
