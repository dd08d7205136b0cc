from __future__ import annotations

from datetime import timedelta

import pytest

from blame_status.ago import from_timestamp
from blame_status.constants import DEFAULT_MESSAGE_FORMAT
from blame_status.decorator import (
    TOKEN_NAMES,
    modify,
    normalize_commit_info_tokens,
    parse_tokens,
    run_key,
    to_text_view,
)
from blame_status.models import CommitParty, CommitRecord, blank_commit


@pytest.fixture()
def commit() -> CommitRecord:
    return CommitRecord(
        hash="1234567" + "890" * 11,
        author=CommitParty(
            name="Authorname",
            mail="author@mail.example",
            timestamp=1337,
            tz="+0200",
        ),
        committer=CommitParty(
            name="Commitername",
            mail="committer@mail.example",
            timestamp=1338,
            tz="+0300",
        ),
        summary="Fake commit",
        filename="fake/file.name",
    )


@pytest.fixture()
def tokens(commit: CommitRecord):
    return normalize_commit_info_tokens(commit, now=from_timestamp(1337 + 180))


def test_binding_table_has_fixed_vocabulary(tokens) -> None:
    assert set(tokens) == set(TOKEN_NAMES)
    assert len(TOKEN_NAMES) == 17


def test_end_to_end_render(commit: CommitRecord) -> None:
    text = to_text_view(
        commit,
        "${commit.hash_short} by ${author.name} ${time.ago}",
        now=from_timestamp(1337 + 180),
    )
    assert text == "1234567 by Authorname right now"


def test_default_message_format(commit: CommitRecord) -> None:
    text = to_text_view(commit, DEFAULT_MESSAGE_FORMAT, now=from_timestamp(1337 + 180))
    assert text == "Blame Authorname ( right now )"


def test_pass_through_bindings_ignore_parameter(tokens) -> None:
    assert run_key(tokens, "author.mail", "3") == "author@mail.example"
    assert run_key(tokens, "author.timestamp", "") == "1337"
    assert run_key(tokens, "author.tz", "") == "+0200"
    assert run_key(tokens, "committer.name", "") == "Commitername"
    assert run_key(tokens, "committer.timestamp", "") == "1338"
    assert run_key(tokens, "committer.tz", "") == "+0300"
    assert run_key(tokens, "commit.hash", "4") == "1234567" + "890" * 11


def test_hash_short_truncation(tokens) -> None:
    assert run_key(tokens, "commit.hash_short", "") == "1234567"
    assert run_key(tokens, "commit.hash_short", "10") == "1234567890"
    assert run_key(tokens, "commit.hash_short", "3x") == "123"
    assert run_key(tokens, "commit.hash_short", "abc") == ""
    assert run_key(tokens, "commit.hash_short", "  ") == ""
    assert run_key(tokens, "commit.hash_short", "0") == ""
    assert run_key(tokens, "commit.hash_short", "-2") == ""


def test_summary_truncation(tokens) -> None:
    assert run_key(tokens, "commit.summary", "") == "Fake commit"
    assert run_key(tokens, "commit.summary", "4") == "Fake"
    assert run_key(tokens, "commit.summary", "500") == "Fake commit"
    assert run_key(tokens, "commit.summary", "all") == ""


def test_dates_use_utc_calendar_day() -> None:
    commit = CommitRecord(
        hash="abcdef0",
        author=CommitParty(name="A", timestamp=1700000000),
        committer=CommitParty(name="C", timestamp=1700000000 + 7200),
    )
    tokens = normalize_commit_info_tokens(commit, now=from_timestamp(1700000000 + 7200))
    assert run_key(tokens, "author.date", "") == "2023-11-14"
    assert run_key(tokens, "committer.date", "") == "2023-11-15"


def test_author_and_committer_ago(commit: CommitRecord) -> None:
    tokens = normalize_commit_info_tokens(commit, now=from_timestamp(1337 + 7200))
    assert run_key(tokens, "time.ago", "") == "2 hours ago"
    assert run_key(tokens, "time.from", "") == "2 hours ago"
    assert run_key(tokens, "time.c_ago", "") == "1 hour ago"
    assert run_key(tokens, "time.c_from", "") == "1 hour ago"


def test_unknown_token_echoes_name(tokens) -> None:
    assert parse_tokens("${nope}", tokens) == "nope"
    assert parse_tokens("${nope,3}", tokens) == "nope"
    assert parse_tokens("${nope|u}", tokens) == "NOPE"
    assert run_key({}, "author.name", "") == "author.name"


def test_modify() -> None:
    assert modify("abc", "u") == "ABC"
    assert modify("ABC", "l") == "abc"
    assert modify("x", "zz") == "x|zz"
    assert modify("x", "") == "x"


def test_parameter_and_modifier_combined(tokens) -> None:
    assert parse_tokens("${commit.summary,4|u}", tokens) == "FAKE"
    assert parse_tokens("${author.name|x}", tokens) == "Authorname|x"
    assert parse_tokens("${author.name|l}", tokens) == "authorname"


def test_literal_templates_are_unchanged(tokens) -> None:
    template = "no tokens here $ { } ${1} ${} $"
    assert parse_tokens(template, tokens) == template


def test_unterminated_token_is_literal(tokens) -> None:
    assert parse_tokens("abc ${foo", tokens) == "abc ${foo"
    assert parse_tokens("${author.name} ${foo", tokens) == "Authorname ${foo"


def test_non_string_template_renders_empty(commit: CommitRecord, tokens) -> None:
    assert parse_tokens(None, tokens) == ""
    assert parse_tokens(42, tokens) == ""
    assert to_text_view(commit, None) == ""


def test_blank_commit_short_circuits() -> None:
    commit = blank_commit()
    assert to_text_view(commit, "${commit.hash}") == "Not Committed Yet"
    assert to_text_view(commit, "${commit.hash}", "Uncommitted") == "Uncommitted"
    assert to_text_view(commit, "${commit.hash}", "") == "Not Committed Yet"
    assert to_text_view(commit, None, None) == "Not Committed Yet"


def test_default_now_is_current_time(commit: CommitRecord) -> None:
    assert to_text_view(commit, "${time.ago}").endswith("years ago")


def test_now_relative_render(commit: CommitRecord) -> None:
    now = from_timestamp(1337) + timedelta(days=45)
    assert to_text_view(commit, "${time.ago|u}", now=now) == "1 MONTH AGO"


def test_empty_format_renders_empty(commit: CommitRecord) -> None:
    assert to_text_view(commit, "", now=from_timestamp(1337 + 180)) == ""


def test_latest_representable_timestamp_renders() -> None:
    commit = CommitRecord(
        hash="abcdef0",
        author=CommitParty(name="Future", timestamp=253402300799),
        committer=CommitParty(name="Future", timestamp=253402300799),
    )
    now = from_timestamp(1700000000)
    assert to_text_view(commit, "${author.name} ${author.date} ${time.ago}", now=now) == (
        "Future 9999-12-31 right now"
    )
