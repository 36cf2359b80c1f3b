"""Inline Markdown rendering for names and descriptions.

Catalog entries use a small inline subset: links, code spans, bold and
italic. Text is escaped first, so the output is always safe to embed.
"""

import re

from markupsafe import Markup, escape

_CODE = re.compile(r"`([^`]+)`")
_LINK = re.compile(r"\[([^\]]+)\]\(([^)\s]+)\)")
_BOLD = re.compile(r"\*\*(.+?)\*\*")
_ITALIC = re.compile(r"(?<![\w*])[*_](?![\s*_])(.+?)(?<![\s*_])[*_](?![\w*])")

_SAFE_SCHEMES = ("http://", "https://", "mailto:")

# Placeholder for fragments that later substitutions must not touch.
_STASH = "\x00{}\x00"


def _emphasis(html: str) -> str:
    html = _BOLD.sub(r"<strong>\1</strong>", html)
    return _ITALIC.sub(r"<em>\1</em>", html)


def render_inline(text: str) -> Markup:
    """Render inline Markdown in *text* to HTML."""
    stash: list[str] = []

    def _keep(fragment: str) -> str:
        stash.append(fragment)
        return _STASH.format(len(stash) - 1)

    def _code(match: re.Match) -> str:
        return _keep(f"<code>{match.group(1)}</code>")

    def _link(match: re.Match) -> str:
        label, href = _emphasis(match.group(1)), match.group(2)
        if not href.startswith(_SAFE_SCHEMES):
            return label
        return _keep(
            f'<a href="{href}" target="_blank" rel="noopener noreferrer">{label}</a>'
        )

    html = str(escape(text))
    html = _CODE.sub(_code, html)
    html = _LINK.sub(_link, html)
    html = _emphasis(html)

    # Links may wrap stashed code spans, so restore newest first.
    for i in reversed(range(len(stash))):
        html = html.replace(_STASH.format(i), stash[i])
    return Markup(html)


def strip_inline(text: str) -> str:
    """Drop inline Markdown syntax, keeping the visible text."""
    text = _LINK.sub(r"\1", text)
    text = _CODE.sub(r"\1", text)
    text = _BOLD.sub(r"\1", text)
    return _ITALIC.sub(r"\1", text)
