"""
Lexer for raw Doxygen comment text.

Splits a comment block into a flat list of primitive tokens. The lexer
never fails: anything it does not recognise is folded into the nearest
word token.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum, auto


class TokenKind(Enum):
    TAG_MARKER = auto()
    BRACE = auto()
    WORD = auto()
    WHITESPACE = auto()
    NEWLINE = auto()


@dataclass(frozen=True)
class Token:
    kind: TokenKind
    text: str

    @property
    def is_marker(self):
        return self.kind is TokenKind.TAG_MARKER


BRACES = ("{", "}")
WHITESPACE = (" ", "\t")


def lex(text: str) -> list[Token]:
    tokens: list[Token] = []

    for ch in text:
        last = tokens[-1] if tokens else None

        if ch == "@":
            tokens.append(Token(TokenKind.TAG_MARKER, ch))
        elif ch == "\\":
            # "\\" is the escaped spelling of "\", not two markers
            if last is not None and last.is_marker and last.text == "\\":
                tokens[-1] = Token(TokenKind.TAG_MARKER, "\\\\")
            else:
                tokens.append(Token(TokenKind.TAG_MARKER, ch))
        elif ch in BRACES:
            tokens.append(Token(TokenKind.BRACE, ch))
        elif ch in WHITESPACE:
            tokens.append(Token(TokenKind.WHITESPACE, ch))
        elif ch == "\n":
            tokens.append(Token(TokenKind.NEWLINE, ch))
        elif last is not None and last.kind is TokenKind.WORD:
            tokens[-1] = Token(TokenKind.WORD, last.text + ch)
        else:
            tokens.append(Token(TokenKind.WORD, ch))

    return tokens


def untokenize(tokens) -> str:
    return "".join(t.text for t in tokens)
