"""
Matching of Doxygen tag markers.

A tag can be spelled ``@tag``, ``\\tag`` or ``\\\\tag``. All helpers here
compare whole whitespace-delimited tokens so ``param`` never matches
``parameter``.
"""

from __future__ import annotations

import re

MARKER_SPELLINGS = ("\\\\", "\\", "@")
_LEADING_TOKEN_RE = re.compile(r"^\s*\S+\s*")


def notation_spellings(tag):
    return tuple(f"{marker}{tag}" for marker in MARKER_SPELLINGS)


def _tag_word(token):
    """Cut a token at its qualifier suffix: ``@param[in]`` -> ``@param``."""
    for stop in ("[", "{"):
        idx = token.find(stop)
        if idx > 0:
            token = token[:idx]
    return token


def is_notation(word, tag):
    return word in notation_spellings(tag)


def starts_with_notation(text, tag):
    tokens = text.split()
    if not tokens:
        return False
    return is_notation(_tag_word(tokens[0]), tag)


def contains_notation(text, tag):
    return any(is_notation(_tag_word(tok), tag) for tok in text.split())


def strip_notation(text, tag):
    """Remove a leading ``tag`` marker (and its qualifier) from ``text``."""
    if not starts_with_notation(text, tag):
        return text
    return _LEADING_TOKEN_RE.sub("", text, count=1)


def replace_notation(text, tag, to):
    """Replace every whole ``tag`` marker word in ``text`` with ``to``."""
    return " ".join(to if is_notation(word, tag) else word for word in text.split())


def leading_notation(text):
    """``(marker, tag)`` when the first token of ``text`` is a tag marker."""
    tokens = text.split()
    if not tokens:
        return None
    word = _tag_word(tokens[0])
    for marker in MARKER_SPELLINGS:
        if word.startswith(marker):
            tag = word[len(marker) :]
            return (marker, tag) if tag else None
    return None
