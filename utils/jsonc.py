"""Comment stripping for JSON files that carry // line or /* block */ comments."""
from __future__ import annotations


def strip_comments(text: str) -> str:
    """Remove comments outside of string literals.

    A block comment leaves its newlines behind, or a single space when it has none,
    so `[1/**/2]` stays two tokens.
    """
    out: list[str] = []
    in_string = False
    escaped = False
    i = 0
    while i < len(text):
        ch = text[i]
        nxt = text[i + 1] if i + 1 < len(text) else ""
        if in_string:
            out.append(ch)
            if escaped:
                escaped = False
            elif ch == "\\":
                escaped = True
            elif ch == '"':
                in_string = False
            i += 1
            continue

        if ch == '"':
            in_string = True
            out.append(ch)
            i += 1
            continue

        if ch == "/" and nxt == "/":
            while i < len(text) and text[i] != "\n":
                i += 1
            continue

        if ch == "/" and nxt == "*":
            end = text.find("*/", i + 2)
            block = text[i:] if end == -1 else text[i:end + 2]
            out.append("\n" * block.count("\n") or " ")
            i = len(text) if end == -1 else end + 2
            continue

        out.append(ch)
        i += 1

    return "".join(out)
