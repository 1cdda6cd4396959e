"""Rewrites a standalone SVG document into a sprite `<symbol>` fragment."""

from __future__ import annotations

import re
from dataclasses import dataclass
from html import escape

STRIPPED_ROOT_ATTRIBUTES = frozenset({"fill", "width", "height", "id"})

_PROLOG_ITEM = re.compile(
    r"\s*(?:<\?.*?\?>|<!--.*?-->|<!DOCTYPE[^>\[]*(?:\[.*?\])?\s*>)",
    re.DOTALL | re.IGNORECASE,
)
_ROOT_OPEN = re.compile(r"\s*<svg(?=[\s/>])")
_ROOT_TAG_END = re.compile(r"\s*(/?)>")
_ROOT_ATTRIBUTE = re.compile(r"""\s+([^\s=/>"']+)(?:\s*=\s*("[^"]*"|'[^']*'|[^\s"'=<>`]+))?""")
_ROOT_CLOSE = re.compile(r"</svg\s*>")


class SvgNormalizationError(Exception):
    """Raised when the downloaded markup has no parseable root `<svg>` element."""


@dataclass(frozen=True)
class RootAttribute:
    """One attribute of the root start tag with its original source text."""

    name: str
    source: str


def normalize_svg(raw_svg: str, symbol_id: str) -> str:
    """Turn a rendered SVG document into `<symbol id="...">` markup.

    Only the root start tag is parsed: its `fill`, `width`, `height` and `id`
    attributes are dropped and the rest keep their original text. Everything
    between the root start tag and the last `</svg>` is copied unchanged.
    Anything before the root element (XML declaration, comments, doctype) and
    after its closing tag is discarded.
    """
    position = _skip_prolog(raw_svg)
    opening = _ROOT_OPEN.match(raw_svg, position)
    if opening is None:
        raise SvgNormalizationError("Markup does not start with an <svg> root element.")

    attributes, tag_end, self_closing = _parse_root_attributes(raw_svg, opening.end())
    if self_closing:
        content = ""
    else:
        closing = _last_root_close(raw_svg, tag_end)
        content = raw_svg[tag_end:closing]

    kept = "".join(
        attribute.source
        for attribute in attributes
        if attribute.name not in STRIPPED_ROOT_ATTRIBUTES
    )
    return f'<symbol id="{escape(symbol_id, quote=True)}"{kept}>{content}</symbol>'


def _skip_prolog(text: str) -> int:
    position = 0
    while True:
        match = _PROLOG_ITEM.match(text, position)
        if match is None:
            return position
        position = match.end()


def _parse_root_attributes(text: str, position: int) -> tuple[list[RootAttribute], int, bool]:
    attributes: list[RootAttribute] = []
    while True:
        end = _ROOT_TAG_END.match(text, position)
        if end is not None:
            return attributes, end.end(), end.group(1) == "/"
        attribute = _ROOT_ATTRIBUTE.match(text, position)
        if attribute is None:
            raise SvgNormalizationError(f"Malformed root <svg> tag near offset {position}.")
        attributes.append(RootAttribute(name=attribute.group(1), source=attribute.group(0)))
        position = attribute.end()


def _last_root_close(text: str, content_start: int) -> int:
    closing_tags = list(_ROOT_CLOSE.finditer(text, content_start))
    if not closing_tags:
        raise SvgNormalizationError("Root <svg> element is not closed.")
    return closing_tags[-1].start()
