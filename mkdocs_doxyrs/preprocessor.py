"""
Inline substitutions applied to a single comment line.

Every pass works on whitespace-delimited words and rejoins them with a
single space, so runs of whitespace collapse. A marker word consumes the
word that follows it; a marker at the end of a line simply disappears.
"""

from __future__ import annotations

from .emojis import EMOJIS, UNKNOWN_EMOJI
from .notation import is_notation, replace_notation

_REF_TAGS = ("ref", "sa", "see")
_ITALIC_TAGS = ("a", "e", "em")
_BOLD_TAGS = ("b",)
_CODE_SPAN_TAGS = ("c", "p")


def _is_any(word, tags):
    return any(is_notation(word, tag) for tag in tags)


def _rejoin(words):
    return " ".join(w for w in words if w)


def _strip_trailing_punct(word):
    if word.endswith((".", ",")):
        return word[:-1]
    return word


def _consume_next(text, is_marker, apply):
    """Drop every marker word and rewrite the word right after it."""
    out = []
    pending = False
    for word in text.split():
        if pending:
            pending = False
            out.append(apply(word))
        elif is_marker(word):
            pending = True
        else:
            out.append(word)
    return _rejoin(out)


def make_links_clickable(text):
    out = []
    for word in text.split():
        if word.startswith(("http://", "https://")):
            word = f"<{_strip_trailing_punct(word)}>"
        out.append(word)
    return _rejoin(out)


def make_refs_clickable(text):
    return _consume_next(
        text,
        lambda w: _is_any(w, _REF_TAGS),
        lambda w: f"[`{_strip_trailing_punct(w)}`]",
    )


def add_emojis(text):
    return _consume_next(
        text,
        lambda w: is_notation(w, "emoji"),
        lambda w: EMOJIS.get(w.strip(":"), UNKNOWN_EMOJI),
    )


def make_styled_text(text):
    out = []
    style = None
    for word in text.split():
        if style is not None:
            out.append(style.format(word))
            style = None
        elif _is_any(word, _ITALIC_TAGS):
            style = "*{}*"
        elif _is_any(word, _BOLD_TAGS):
            style = "**{}**"
        elif _is_any(word, _CODE_SPAN_TAGS):
            style = "`{}`"
        else:
            out.append(word)
    return _rejoin(out)


def render_code_markers(text):
    # code last, its replacement holds a newline
    text = replace_notation(text, "endcode", "```")
    return replace_notation(text, "code", "\n```")


def preprocess_line(line):
    text = make_links_clickable(line)
    text = make_refs_clickable(text)
    text = add_emojis(text)
    text = make_styled_text(text)
    return render_code_markers(text)
