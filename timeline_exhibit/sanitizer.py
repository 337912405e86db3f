"""HTML purification for slide text fields."""

from __future__ import annotations

import re

from bs4 import BeautifulSoup, Comment

# Elements removed together with their content.
_DROPPED_TAGS = (
    "script", "style", "template", "noscript", "iframe", "frame", "frameset", "object", "embed",
    "applet", "form", "input", "button", "select", "textarea", "svg", "math", "head", "title",
    "meta", "link", "base",
)
# Any other element outside this list is replaced by its content.
_ALLOWED_TAGS = frozenset((
    "a", "abbr", "b", "blockquote", "br", "caption", "cite", "code", "dd", "del", "div", "dl",
    "dt", "em", "figcaption", "figure", "h1", "h2", "h3", "h4", "h5", "h6", "hr", "i", "img",
    "ins", "li", "ol", "p", "pre", "q", "s", "small", "span", "strong", "sub", "sup", "table",
    "tbody", "td", "tfoot", "th", "thead", "tr", "u", "ul",
))
_GLOBAL_ATTRIBUTES = frozenset(("class", "dir", "lang", "title"))
_ALLOWED_ATTRIBUTES = {
    "a": frozenset(("href", "rel", "target")),
    "img": frozenset(("alt", "height", "src", "width")),
    "ol": frozenset(("start",)),
    "td": frozenset(("colspan", "rowspan")),
    "th": frozenset(("colspan", "rowspan", "scope")),
    "blockquote": frozenset(("cite",)),
    "q": frozenset(("cite",)),
}
_URL_ATTRIBUTES = frozenset(("cite", "href", "src"))
_ALLOWED_SCHEMES = frozenset(("http", "https", "mailto"))

# Browsers ignore control characters and whitespace inside a url scheme.
_IGNORED_URL_CHARACTERS_RE = re.compile(r"[\x00-\x20\x7f-\x9f\s]+")
_SCHEME_RE = re.compile(r"^([^/?#]*):")
_END_OF_LINE_RE = re.compile(r"\r\n|\n\r|\r")


def is_safe_url(value: str) -> bool:
    """Check a url is relative or uses http, https or mailto."""
    match = _SCHEME_RE.match(_IGNORED_URL_CHARACTERS_RE.sub("", value).lower())
    return match is None or match.group(1) in _ALLOWED_SCHEMES


class BeautifulSoupSanitizer:
    """Reduce a markup fragment to a fixed set of text formatting elements.

    Active and embedded content (scripts, styles, frames, forms, svg and
    math) is removed with its content. Other unknown elements are replaced
    by their content. Only listed attributes are kept, and urls must be
    relative or use the http, https or mailto scheme.
    """

    def purify(self, markup: str) -> str:
        if not markup:
            return ""
        soup = BeautifulSoup(markup, "html.parser")

        for tag in soup.find_all(_DROPPED_TAGS):
            if not tag.decomposed:
                tag.decompose()
        for comment in soup.find_all(string=lambda text: isinstance(text, Comment)):
            comment.extract()

        for tag in soup.find_all(True):
            if tag.name not in _ALLOWED_TAGS:
                tag.unwrap()
                continue
            allowed = _GLOBAL_ATTRIBUTES | _ALLOWED_ATTRIBUTES.get(tag.name, frozenset())
            for attribute in list(tag.attrs):
                if attribute not in allowed:
                    del tag.attrs[attribute]
                elif attribute in _URL_ATTRIBUTES and not is_safe_url(str(tag.attrs[attribute])):
                    del tag.attrs[attribute]

        return str(soup)


def fix_end_of_line(text: str) -> str:
    """Normalize Windows and old Mac line endings pasted from a textarea."""
    return _END_OF_LINE_RE.sub("\n", text or "")
