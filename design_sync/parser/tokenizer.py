"""Tokenizer for utility-class strings.

Splits a class string on whitespace and breaks each token into variant
prefixes, the important flag, a negative sign, the utility name, an optional
bracketed arbitrary value and an optional ``/modifier`` suffix.
"""

from dataclasses import dataclass


@dataclass(frozen=True)
class ClassToken:
    """One whitespace-separated utility token, decomposed."""

    raw: str
    utility: str
    variants: tuple[str, ...] = ()
    important: bool = False
    negative: bool = False
    arbitrary: str | None = None
    modifier: str | None = None
    malformed: bool = False


def _split_outside_brackets(text: str, separator: str) -> list[str]:
    parts: list[str] = []
    depth = 0
    current: list[str] = []
    for char in text:
        if char == "[":
            depth += 1
        elif char == "]":
            depth = max(depth - 1, 0)
        if char == separator and depth == 0:
            parts.append("".join(current))
            current = []
            continue
        current.append(char)
    parts.append("".join(current))
    return parts


def tokenize_one(raw: str) -> ClassToken:
    """Decompose a single class token. Never raises."""
    *variants, base = _split_outside_brackets(raw, ":")

    important = False
    if base.startswith("!"):
        important, base = True, base[1:]
    elif base.endswith("!"):
        important, base = True, base[:-1]

    negative = False
    if base.startswith("-"):
        negative, base = True, base[1:]

    modifier = None
    slash_parts = _split_outside_brackets(base, "/")
    if len(slash_parts) > 1:
        base, modifier = "/".join(slash_parts[:-1]), slash_parts[-1]

    arbitrary = None
    malformed = False
    if "[" in base or "]" in base:
        open_index = base.find("-[")
        if open_index > 0 and base.endswith("]") and base.count("[") == 1:
            arbitrary = base[open_index + 2 : -1]
            base = base[:open_index]
            if not arbitrary:
                malformed = True
        else:
            malformed = True

    return ClassToken(
        raw=raw,
        utility=base,
        variants=tuple(variants),
        important=important,
        negative=negative,
        arbitrary=arbitrary,
        modifier=modifier,
        malformed=malformed or not base or any(not v for v in variants),
    )


def tokenize(class_string: str) -> list[ClassToken]:
    """Tokenize a class string, left to right."""
    if not class_string:
        return []
    return [tokenize_one(raw) for raw in class_string.split()]
