"""Single-pass tokenizer for ``${...}`` format templates."""

from __future__ import annotations

import string
from dataclasses import dataclass
from enum import Enum
from typing import Union


@dataclass(frozen=True)
class ParsedToken:
    """Function name plus the optional parameter and display modifier."""

    function: str
    parameter: str = ""
    modifier: str = ""


@dataclass(frozen=True)
class LiteralPiece:
    text: str


@dataclass(frozen=True)
class TokenPiece:
    token: ParsedToken


TemplatePiece = Union[LiteralPiece, TokenPiece]


class _Mode(Enum):
    OUT = "out"
    IN = "in"


def _substring(value: str, start: int, end: int) -> str:
    # Reversed bounds are swapped rather than producing an empty slice.
    if start > end:
        start, end = end, start
    return value[start:end]


def parse_body(body: str) -> ParsedToken:
    """Split a raw token body on its first ``,`` and first ``|``.

    The two indices are located independently. When both are present the
    parameter is the text between them whatever their relative order, so
    ``"a|u,b"`` yields parameter ``"|u,"`` and modifier ``"u,b"``.
    """
    parameter_index = body.find(",")
    modifier_index = body.find("|")

    if parameter_index != -1 and modifier_index != -1:
        return ParsedToken(
            function=body[:parameter_index],
            parameter=_substring(body, parameter_index + 1, modifier_index),
            modifier=body[modifier_index + 1:],
        )
    if parameter_index != -1:
        return ParsedToken(
            function=body[:parameter_index],
            parameter=body[parameter_index + 1:],
        )
    if modifier_index != -1:
        return ParsedToken(
            function=body[:modifier_index],
            modifier=body[modifier_index + 1:],
        )
    return ParsedToken(function=body)


def _opens_token(template: str, index: int) -> bool:
    if template[index] != "$" or template[index + 1:index + 2] != "{":
        return False
    potential_letter = template[index + 2:index + 3]
    return potential_letter != "" and potential_letter in string.ascii_letters


def scan(template: str) -> list[TemplatePiece]:
    """Split ``template`` into literal and token pieces in source order.

    A token opens on ``${`` followed by an ASCII letter and closes on the next
    ``}``. Text after an unterminated opener is kept in the trailing literal,
    and a trailing literal is always emitted, possibly empty.
    """
    pieces: list[TemplatePiece] = []
    last_split = 0
    mode = _Mode.OUT
    index = 0

    while index < len(template):
        if mode is _Mode.OUT and _opens_token(template, index):
            mode = _Mode.IN
            pieces.append(LiteralPiece(template[last_split:index]))
            last_split = index
            index += 1
        elif mode is _Mode.IN and template[index] == "}":
            mode = _Mode.OUT
            pieces.append(TokenPiece(parse_body(template[last_split + 2:index])))
            last_split = index + 1
        index += 1

    pieces.append(LiteralPiece(template[last_split:]))
    return pieces
