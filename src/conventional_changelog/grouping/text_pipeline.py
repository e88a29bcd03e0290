"""
String transforms used to turn a commit head into a changelog line.

Every function here is total: it accepts any string and returns a
string (or a tuple of strings), never raising. They are combined by
:mod:`conventional_changelog.grouping.commit_classifier`.
"""

from __future__ import annotations

import re
from typing import Optional, Tuple


_WHITESPACE = re.compile(r"\s+")
_SCOPE = re.compile(r"^\((?P<scope>.*?)\)!?:?\s*(?P<rest>.*)$", re.DOTALL)
_FILE_EXTENSION = re.compile(r"\.(?:php|md|json|txt|csv)(?=$|\s)")
_DEDUP_STRIP = re.compile(r"[^a-zA-Z0-9_-]+")


def clean(text: str) -> str:
    """Trim surrounding whitespace."""
    return text.strip()


def collapse_whitespace(text: str) -> str:
    """Replace every run of whitespace (newlines included) by one space."""
    return _WHITESPACE.sub(" ", text).strip()


def capitalize_first(text: str) -> str:
    """Upper-case the first character, leaving the rest untouched."""
    return text[:1].upper() + text[1:]


def strip_type_prefix(head: str, code: str) -> str:
    """Remove ``code`` and a following ``!`` / ``:`` from the start of ``head``.

    A scope directly after the code is left in place for :func:`split_scope`.
    """
    return re.sub(rf"^{re.escape(code)}!?:?\s*", "", head, count=1, flags=re.IGNORECASE)


def split_scope(text: str) -> Tuple[Optional[str], str]:
    """Split a leading ``(scope)`` off ``text``.

    >>> split_scope("(parser)!: add imports")
    ('parser', 'add imports')
    >>> split_scope("add imports")
    (None, 'add imports')
    """
    match = _SCOPE.match(text)
    if not match:
        return None, text
    scope = clean(match.group("scope"))
    return (scope or None), match.group("rest")


def _split_camel_case(text: str) -> str:
    """Insert a space before each capital that starts a new word.

    A capital starts a word when it follows a lower-case letter or precedes
    one (``HTMLParser``). Works for any script with letter case.
    """
    chars = []
    for index, char in enumerate(text):
        if index and char.isupper():
            before = text[index - 1]
            after = text[index + 1 : index + 2]
            if before.islower() or after.islower():
                chars.append(" ")
        chars.append(char)
    return "".join(chars)


def humanize_context(scope: str) -> str:
    """Turn a commit scope into a heading label.

    ``user_profile`` becomes ``User profile``, ``userProfile`` becomes
    ``User Profile`` and ``README.md`` becomes ``README``.
    """
    label = collapse_whitespace(scope.replace("_", " "))
    label = capitalize_first(label)
    label = _split_camel_case(label)
    label = _FILE_EXTENSION.sub("", label)
    return collapse_whitespace(label)


def clean_description(text: str) -> str:
    return capitalize_first(collapse_whitespace(text))


def dedup_key(description: str) -> str:
    """Identity used to merge commits describing the same change."""
    return _DEDUP_STRIP.sub("", description).lower()
