from __future__ import annotations

import re
from dataclasses import dataclass
from functools import lru_cache


def codeowners_path_to_glob(path: str) -> str:
    """Translate one CODEOWNERS path token into a glob.

    Tokens with a leading "/" are anchored to the repository root; changed
    file paths never carry that slash, so it is dropped. Every other token
    floats and may match at any depth. A trailing "/" names a directory and
    covers the directory itself plus everything beneath it.
    """
    # a bare "*" owns the whole tree
    if path == "*":
        return "**"

    if path.startswith("/"):
        glob = path[1:]
    else:
        glob = f"**/{path}"

    if glob.endswith("/"):
        glob = f"{glob}**"
    return glob


@dataclass(frozen=True)
class PathGlob:
    pattern: str
    regex: re.Pattern[str]

    def matches(self, path: str) -> bool:
        return self.regex.fullmatch(path) is not None


def compile_glob(pattern: str) -> PathGlob:
    """Compile a glob with dot files enabled.

    Supported syntax: `*` (within one segment; a whole `*` segment must be
    non-empty), `**` (any number of segments, including none), `?`, `[...]`
    classes, `{a,b}` alternation and `\\x` escapes. A leading `!` is literal
    here; negation is handled by the caller. A trailing slash on the tested
    path is always tolerated.
    """
    return PathGlob(pattern=pattern, regex=_compile(pattern))


@lru_cache(maxsize=None)
def _compile(pattern: str) -> re.Pattern[str]:
    alternatives = list(dict.fromkeys(_expand_braces(pattern)))
    if len(alternatives) == 1:
        return re.compile(_glob_regex(pattern), re.DOTALL)
    return re.compile("|".join(f"(?:{_glob_regex(p)})" for p in alternatives), re.DOTALL)


def _expand_braces(pattern: str) -> list[str]:
    """Expand the first `{a,b}` group (and, recursively, the rest).

    Groups without a top-level comma stay literal.
    """
    depth = 0
    start = 0
    commas: list[int] = []
    i = 0
    while i < len(pattern):
        c = pattern[i]
        if c == "\\":
            i += 2
            continue
        if c == "{":
            if depth == 0:
                start = i
                commas = []
            depth += 1
        elif c == "}" and depth:
            depth -= 1
            if depth == 0 and commas:
                head, tail = pattern[:start], pattern[i + 1 :]
                bounds = [start, *commas, i]
                return [
                    expanded
                    for lo, hi in zip(bounds, bounds[1:])
                    for expanded in _expand_braces(head + pattern[lo + 1 : hi] + tail)
                ]
        elif c == "," and depth == 1:
            commas.append(i)
        i += 1
    return [pattern]


def _glob_regex(pattern: str) -> str:
    segments: list[str] = []
    for segment in pattern.split("/"):
        if segment == "**" and segments and segments[-1] == "**":
            continue
        segments.append(segment)

    if segments == ["**"]:
        return r".+"

    parts: list[str] = []
    need_sep = False
    last = len(segments) - 1
    for idx, segment in enumerate(segments):
        if segment == "**":
            if idx == 0:
                parts.append("(?:.*/)?")
                need_sep = False
            elif idx == last:
                parts.append("(?:/.*)?")
            else:
                parts.append("(?:/.*)?/")
                need_sep = False
            continue
        if need_sep:
            parts.append("/")
        parts.append(_segment_regex(segment))
        need_sep = True

    return "".join(parts) + "/?"


def _segment_regex(segment: str) -> str:
    if segment == "*":
        return "[^/]+"

    out: list[str] = []
    i = 0
    n = len(segment)
    while i < n:
        c = segment[i]
        if c == "\\" and i + 1 < n:
            i += 1
            out.append(re.escape(segment[i]))
        elif c == "*":
            while i + 1 < n and segment[i + 1] == "*":
                i += 1
            out.append("[^/]*")
        elif c == "?":
            out.append("[^/]")
        elif c == "[":
            end = segment.find("]", i + 2)
            if end == -1:
                out.append(re.escape(c))
            else:
                out.append(_class_regex(segment[i + 1 : end]))
                i = end
        else:
            out.append(re.escape(c))
        i += 1
    return "".join(out)


def _class_regex(body: str) -> str:
    negated = body[0] in "!^"
    if negated:
        body = body[1:]
    body = body.replace("\\", "\\\\").replace("[", "\\[")
    if negated:
        return f"[^/{body}]"
    return f"[{body}]"
