"""
Utility functions for AdTags.
"""

from __future__ import annotations

import html
import re
import uuid

_JS_IDENTIFIER = re.compile(r"^[A-Za-z_$][A-Za-z0-9_$]*$")
_TAG_NAME = re.compile(r"^[A-Za-z][A-Za-z0-9-]*$")

_JS_STRING_ESCAPES = {
    "\\": "\\\\",
    "'": "\\'",
    '"': '\\"',
    "\n": "\\n",
    "\r": "\\r",
    "\u2028": "\\u2028",
    "\u2029": "\\u2029",
    # Keep "</script>" and HTML comment openers out of inline scripts
    "<": "\\x3c",
    ">": "\\x3e",
    "&": "\\x26",
}


def generate_request_id() -> str:
    """Generate a unique request ID."""
    return str(uuid.uuid4())


def is_blank(value: str | None) -> bool:
    """True for None, empty and whitespace-only strings."""
    return value is None or not value.strip()


def is_js_identifier(value: str) -> bool:
    """Check that a string can be used inside a JavaScript variable name."""
    return bool(_JS_IDENTIFIER.match(value))


def is_tag_name(value: str) -> bool:
    """Check that a string is a plain HTML element name."""
    return bool(_TAG_NAME.match(value))


def escape_html_attr(value: str) -> str:
    """Escape a value for a double-quoted HTML attribute."""
    return html.escape(value, quote=True)


def escape_html_comment(value: str) -> str:
    """Make a value safe to place inside <!-- ... -->."""
    return html.escape(value, quote=False).replace("--", "&#45;&#45;")


def escape_js_string(value: str) -> str:
    """Escape a value for a single-quoted JavaScript string literal."""
    return "".join(_JS_STRING_ESCAPES.get(ch, ch) for ch in value)
