"""Exclude glob patterns.

Patterns are matched against whole paths relative to the dotfiles root,
the way fnmatch matches a file name: ``*`` and ``?`` also match ``/``, so
``*.swp`` catches swap files at any depth. On top of fnmatch's ``*``,
``?`` and ``[...]`` the syntax supports:

- ``{a,b}`` alternation (not nested),
- ``\\`` escaping the next character,
- ``[^...]`` as a synonym for ``[!...]``,
- ``**/`` matching zero folders, so ``**/x`` also matches a top-level ``x``.

A pattern that cannot be compiled is reported with InvalidGlobError; the
caller decides what to do with it.
"""

import fnmatch
from dataclasses import dataclass

from dotman.core.errors import DotmanError


class InvalidGlobError(DotmanError):
    """Raised when a string is not a valid glob pattern."""

    def __init__(self, pattern: str, reason: str) -> None:
        self.pattern = pattern
        self.reason = reason
        super().__init__(f"invalid glob {pattern!r} ({reason})")


@dataclass(frozen=True, slots=True)
class Glob:
    """A compiled glob.

    Attributes:
        pattern: The pattern as written.
        alternatives: Equivalent fnmatch patterns; a path matches the glob
            if it matches any of them.
    """

    pattern: str
    alternatives: tuple[str, ...]

    def matches(self, path: str) -> bool:
        """Check whether a ``/``-separated relative path matches."""
        return any(fnmatch.fnmatchcase(path, alt) for alt in self.alternatives)


def compile_glob(pattern: str) -> Glob:
    """Compile a glob pattern.

    Raises:
        InvalidGlobError: If the pattern is not valid UTF-8, has an unclosed
            ``[`` or ``{``, a nested ``{``, a reversed range such as
            ``[z-a]``, or ends with a lone ``\\``.
    """
    try:
        pattern.encode("utf-8")
    except UnicodeEncodeError:
        raise InvalidGlobError(pattern, "not valid UTF-8") from None

    expansions = [""]
    branches: list[str] | None = None
    i, n = 0, len(pattern)

    while i < n:
        c = pattern[i]
        if c == "{":
            if branches is not None:
                raise InvalidGlobError(pattern, "nested alternation")
            branches = [""]
            i += 1
            continue
        if c == "," and branches is not None:
            branches.append("")
            i += 1
            continue
        if c == "}" and branches is not None:
            expansions = [e + b for e in expansions for b in branches]
            branches = None
            i += 1
            continue

        if c == "\\":
            if i + 1 == n:
                raise InvalidGlobError(pattern, "dangling escape")
            token = _escape(pattern[i + 1])
            i += 2
        elif c == "[":
            end = _class_end(pattern, i)
            token = _char_class(pattern, pattern[i + 1 : end])
            i = end + 1
        else:
            token = c
            i += 1

        if branches is None:
            expansions = [e + token for e in expansions]
        else:
            branches[-1] += token

    if branches is not None:
        raise InvalidGlobError(pattern, "unclosed alternation")

    alternatives: dict[str, None] = {}
    for expansion in expansions:
        for variant in _globstar_variants(expansion):
            alternatives[variant] = None
    return Glob(pattern=pattern, alternatives=tuple(alternatives))


def is_valid_glob(pattern: str) -> bool:
    """Check whether compile_glob accepts a pattern."""
    try:
        compile_glob(pattern)
    except InvalidGlobError:
        return False
    return True


def _escape(char: str) -> str:
    # fnmatch has no escape character; a one-element class is literal
    return f"[{char}]" if char in "*?[" else char


def _class_end(pattern: str, start: int) -> int:
    """Index of the ``]`` closing the class opened at ``start``."""
    j = start + 1
    if j < len(pattern) and pattern[j] in "!^":
        j += 1
    if j < len(pattern) and pattern[j] == "]":
        j += 1
    while j < len(pattern) and pattern[j] != "]":
        j += 1
    if j >= len(pattern):
        raise InvalidGlobError(pattern, "unclosed character class")
    return j


def _char_class(pattern: str, body: str) -> str:
    """Translate the body of a ``[...]`` class to fnmatch syntax."""
    if body.startswith("^"):
        body = "!" + body[1:]
    members = body[1:] if body.startswith("!") else body
    for k in range(1, len(members) - 1):
        if members[k] == "-" and members[k - 1] > members[k + 1]:
            raise InvalidGlobError(pattern, f"invalid range {members[k - 1]}-{members[k + 1]}")
    return f"[{body}]"


def _globstar_variants(pattern: str) -> list[str]:
    """Variants in which ``**/`` segments match no folder at all."""
    variants = [pattern]
    if pattern.startswith("**/"):
        variants.append(pattern[3:])
    for variant in list(variants):
        if "/**/" in variant:
            variants.append(variant.replace("/**/", "/"))
    return variants
