"""
LSP glob patterns.

Supported syntax, as used in document filters:

- `*` matches within one path segment
- `**` matches any number of segments, including none
- `?` matches one character within a segment
- `{a,b}` matches any of the comma separated alternatives
- `[abc]`, `[a-z]`, `[!abc]` match one character in (or not in) a range
"""

import re
from functools import lru_cache


@lru_cache(maxsize=128)
def compile_glob(pattern: str) -> re.Pattern[str]:
    """
    Translate an LSP glob pattern into a compiled regular expression.

    Raises:
        ValueError: If braces or brackets are unbalanced
    """
    parts: list[str] = []
    depth = 0
    i = 0
    n = len(pattern)

    while i < n:
        c = pattern[i]
        if c == "*":
            if pattern.startswith("**", i):
                i += 2
                if pattern.startswith("/", i):
                    i += 1
                    parts.append("(?:.*/)?")
                else:
                    parts.append(".*")
                continue
            parts.append("[^/]*")
        elif c == "?":
            parts.append("[^/]")
        elif c == "{":
            depth += 1
            parts.append("(?:")
        elif c == "}" and depth:
            depth -= 1
            parts.append(")")
        elif c == "," and depth:
            parts.append("|")
        elif c == "[":
            end = pattern.find("]", i + 1)
            if end == -1:
                raise ValueError(f"Unclosed '[' in glob pattern: {pattern}")
            body = pattern[i + 1:end].replace("\\", "\\\\")
            if body.startswith("!"):
                body = "^" + body[1:]
            elif body.startswith("^"):
                body = "\\" + body
            parts.append(f"[{body}]")
            i = end + 1
            continue
        else:
            parts.append(re.escape(c))
        i += 1

    if depth:
        raise ValueError(f"Unclosed '{{' in glob pattern: {pattern}")

    try:
        return re.compile("".join(parts))
    except re.error as e:
        raise ValueError(f"Invalid glob pattern {pattern}: {e}") from e


def glob_match(path: str, pattern: str) -> bool:
    """Check whether a '/'-separated path matches the whole pattern."""
    return compile_glob(pattern).fullmatch(path) is not None
