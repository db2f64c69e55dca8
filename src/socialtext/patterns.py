"""Classification patterns for hashtags, mentions, and hyperlinks."""

from __future__ import annotations

import re

from socialtext.errors import PatternError
from socialtext.tokens import PRECEDENCE, Category

# Body: word characters (incl. Latin-1 accented letters) with at least one letter or underscore.
_BODY = r"([0-9A-Z_À-ÖØ-öø-ÿ]*[A-Z_]+[a-z0-9_üÀ-ÖØ-öø-ÿ]*)"

HASHTAG = re.compile(r"[#＃]" + _BODY, re.IGNORECASE)
MENTION = re.compile(r"@" + _BODY, re.IGNORECASE)

HYPERLINK = re.compile(
    r"""
    (?:
        (?:https?|ftp|rtsp)://                                  # scheme
        (?:[\w$\-.+!*'(),;?&=%]{1,64}(?::[\w$\-.+!*'(),;?&=%]{1,25})?@)?  # user info
    )?
    (?:
        (?:[^\W_](?:[\w\-]{0,61}[^\W_])?\.)+[^\W\d_]{2,63}       # domain name
        |
        (?:25[0-5]|2[0-4]\d|1\d\d|[1-9]?\d)
        (?:\.(?:25[0-5]|2[0-4]\d|1\d\d|[1-9]?\d)){3}              # IPv4 address
    )
    (?::\d{1,5})?                                               # port
    \b
    (?:
        [/?\#]
        (?:[\w\-.~!$&'()*+,;=:@%/?\#\[\]]*[\w\-~$&*+=@%/\#])?  # path, query, fragment
    )?
    """,
    re.IGNORECASE | re.VERBOSE,
)

DEFAULTS: dict[Category, re.Pattern[str]] = {
    Category.HASHTAG: HASHTAG,
    Category.MENTION: MENTION,
    Category.HYPERLINK: HYPERLINK,
}


class PatternSet:
    """The active pattern for each category.

    Every new set starts from the module-level compiled defaults; replacing a
    pattern only affects this set.
    """

    def __init__(self, overrides: dict[Category, str | re.Pattern[str]] | None = None) -> None:
        self._patterns: dict[Category, re.Pattern[str]] = dict(DEFAULTS)
        for category, regex in (overrides or {}).items():
            self.set_pattern(category, regex)

    def classify(self, category: Category) -> re.Pattern[str]:
        """Return the pattern used for category."""
        return self._patterns[_single(category)]

    def set_pattern(self, category: Category, regex: str | re.Pattern[str]) -> None:
        """Replace the pattern for category.

        Raises PatternError if regex does not compile; the active pattern is
        kept in that case.
        """
        category = _single(category)
        if isinstance(regex, re.Pattern):
            self._patterns[category] = regex
            return
        try:
            compiled = re.compile(regex)
        except re.error as exc:
            raise PatternError.from_re_error(exc, category, regex) from None
        self._patterns[category] = compiled

    def reset(self, category: Category) -> None:
        """Restore the default pattern for category."""
        category = _single(category)
        self._patterns[category] = DEFAULTS[category]

    def is_default(self, category: Category) -> bool:
        category = _single(category)
        return self._patterns[category] is DEFAULTS[category]

    def copy(self) -> PatternSet:
        clone = PatternSet()
        clone._patterns = dict(self._patterns)
        return clone

    def __iter__(self):
        for category in PRECEDENCE:
            yield category, self._patterns[category]


def _single(category: Category) -> Category:
    if category not in DEFAULTS:
        raise ValueError(f"expected a single category, got {category!r}")
    return category


def payload_of(category: Category, match: re.Match[str]) -> str:
    """Symbol-stripped body for hashtags and mentions, the whole match otherwise."""
    if category == Category.HYPERLINK:
        return match.group(0)
    if match.re.groups >= 1 and match.group(1) is not None:
        return match.group(1)
    raw = match.group(0)
    if raw[:1] in category.symbols:
        return raw[1:]
    return raw
