"""Command line interface for rendering blame status text."""

from __future__ import annotations

import argparse
import json
import logging
import sys
from dataclasses import asdict
from pathlib import Path
from typing import Any

import yaml
from pydantic import ValidationError

from .ago import from_timestamp
from .decorator import TOKEN_NAMES, to_text_view
from .errors import BlameStatusError, ErrorCode
from .models import CommitRecord
from .settings import load_settings
from .tokens import LiteralPiece, scan

logger = logging.getLogger(__name__)


def _load_commit(path_value: str) -> CommitRecord:
    commit_path = Path(path_value).expanduser()
    try:
        raw = commit_path.read_text(encoding="utf-8")
    except FileNotFoundError as exc:
        raise BlameStatusError(
            ErrorCode.COMMIT_NOT_FOUND,
            f"Commit file not found: {commit_path}",
            "Point --commit at a JSON or YAML commit record.",
        ) from exc
    except OSError as exc:
        raise BlameStatusError(
            ErrorCode.INVALID_INPUT,
            f"Unable to read commit file: {commit_path}",
            "Ensure --commit points to a readable file.",
        ) from exc

    try:
        if commit_path.suffix.lower() == ".json":
            payload = json.loads(raw)
        else:
            payload = yaml.safe_load(raw)
    except (json.JSONDecodeError, yaml.YAMLError) as exc:
        raise BlameStatusError(
            ErrorCode.INVALID_INPUT,
            "Commit file must contain a valid JSON or YAML document.",
            "Check the commit file syntax.",
            {"path": str(commit_path)},
        ) from exc

    if not isinstance(payload, dict):
        raise BlameStatusError(
            ErrorCode.INVALID_INPUT,
            "Commit file must contain a mapping.",
            "Provide an object with hash, author, committer and summary fields.",
        )
    return CommitRecord.model_validate(payload)


def _print_payload(payload: dict[str, Any], as_json: bool) -> None:
    if as_json:
        print(json.dumps(payload, indent=2))
        return

    if payload.get("status") == "error":
        print(f"[ERROR] {payload.get('message', '')}")
        error_code = payload.get("error_code", "")
        suggestion = payload.get("suggestion", "")
        if error_code:
            print(f"error_code: {error_code}")
        if suggestion:
            print(f"suggestion: {suggestion}")
        return

    if "text" in payload:
        print(payload["text"])

    if "tokens" in payload:
        for name in payload["tokens"]:
            print(name)

    if "pieces" in payload:
        for piece in payload["pieces"]:
            if piece["kind"] == "literal":
                print(f"literal: {piece['text']!r}")
            else:
                print(
                    f"token: function={piece['function']!r} "
                    f"parameter={piece['parameter']!r} modifier={piece['modifier']!r}"
                )


def _error_payload(exc: Exception) -> dict[str, Any]:
    if isinstance(exc, BlameStatusError):
        return exc.to_payload()
    if isinstance(exc, ValidationError):
        return {
            "status": "error",
            "error_code": ErrorCode.INVALID_INPUT.value,
            "message": "Input validation failed",
            "suggestion": "Check the commit record fields and types.",
            "details": {"errors": exc.errors(include_context=False, include_input=False)},
        }
    logger.exception("Unhandled CLI exception", exc_info=exc)
    return {
        "status": "error",
        "error_code": ErrorCode.INTERNAL_ERROR.value,
        "message": str(exc),
        "suggestion": "Retry with --verbose for diagnostics.",
        "details": {},
    }


def _describe_pieces(template: str) -> list[dict[str, str]]:
    described: list[dict[str, str]] = []
    for piece in scan(template):
        if isinstance(piece, LiteralPiece):
            described.append({"kind": "literal", "text": piece.text})
        else:
            described.append({"kind": "token", **asdict(piece.token)})
    return described


def _build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="blame-status",
        description="Render git blame status text from commit metadata",
    )
    parser.add_argument("-v", "--verbose", action="store_true", help="Enable debug logging")
    subparsers = parser.add_subparsers(dest="command", required=True)

    render = subparsers.add_parser("render", help="Render status text for a commit record")
    render.add_argument("--commit", required=True, help="JSON or YAML commit record file")
    render.add_argument("--format", dest="message_format", default=None, help="Message format template")
    render.add_argument(
        "--no-commit-message",
        default=None,
        help="Text shown for lines that are not committed yet",
    )
    render.add_argument("--config", default=None, help="Settings YAML file")
    render.add_argument(
        "--now",
        type=int,
        default=None,
        help="Reference unix timestamp for relative times (defaults to current time)",
    )
    render.add_argument("--json", action="store_true", help="Output machine-readable JSON")

    tokens = subparsers.add_parser("tokens", help="List supported token names")
    tokens.add_argument("--json", action="store_true", help="Output machine-readable JSON")

    parse = subparsers.add_parser("parse", help="Show how a template is tokenized")
    parse.add_argument("template", help="Message format template")
    parse.add_argument("--json", action="store_true", help="Output machine-readable JSON")

    return parser


def main(argv: list[str] | None = None) -> int:
    parser = _build_parser()
    args = parser.parse_args(argv)
    as_json = bool(getattr(args, "json", False))
    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.WARNING,
        stream=sys.stderr,
        format="%(levelname)s %(name)s: %(message)s",
    )

    try:
        if args.command == "render":
            settings = load_settings(
                config_path=args.config,
                overrides={
                    "message_format": args.message_format,
                    "message_no_commit": args.no_commit_message,
                },
            )
            commit = _load_commit(args.commit)
            now = from_timestamp(args.now) if args.now is not None else None
            response: dict[str, Any] = {
                "status": "success",
                "text": to_text_view(
                    commit,
                    settings.message_format,
                    settings.message_no_commit,
                    now=now,
                ),
            }
        elif args.command == "tokens":
            response = {"status": "success", "tokens": list(TOKEN_NAMES)}
        else:
            response = {"status": "success", "pieces": _describe_pieces(args.template)}

        _print_payload(response, as_json=as_json)
        return 0
    except Exception as exc:  # noqa: BLE001
        payload = _error_payload(exc)
        _print_payload(payload, as_json=as_json)
        return 1


if __name__ == "__main__":
    raise SystemExit(main(sys.argv[1:]))
