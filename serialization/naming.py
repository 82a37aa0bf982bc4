"""Key naming conventions applied to dataclass field names when reading/writing YAML or JSON."""
import re
from typing import Callable

NamingConvention = Callable[[str], str]

_LOWER_UPPER = re.compile(r"([a-z0-9])([A-Z])")
_ACRONYM = re.compile(r"([A-Z]+)([A-Z][a-z])")


def split_words(name: str) -> list[str]:
    """'maxPlayers', 'MaxPlayers', 'max_players', 'max-players' -> ['max', 'players']."""
    s = _ACRONYM.sub(r"\1_\2", name.replace("-", "_"))
    s = _LOWER_UPPER.sub(r"\1_\2", s)
    return [w.lower() for w in s.split("_") if w]


def underscored(name: str) -> str:
    return "_".join(split_words(name))


def camel_case(name: str) -> str:
    words = split_words(name)
    if not words:
        return name
    return words[0] + "".join(w.capitalize() for w in words[1:])


def pascal_case(name: str) -> str:
    return "".join(w.capitalize() for w in split_words(name)) or name


def hyphenated(name: str) -> str:
    return "-".join(split_words(name))


def lower_case(name: str) -> str:
    return "".join(split_words(name))


def null_naming(name: str) -> str:
    return name


NAMING_CONVENTIONS: dict[str, NamingConvention] = {
    "underscored": underscored,
    "camel_case": camel_case,
    "pascal_case": pascal_case,
    "hyphenated": hyphenated,
    "lower_case": lower_case,
    "null": null_naming,
}


def get_naming_convention(
    convention: str | NamingConvention | None,
    default: NamingConvention = null_naming,
) -> NamingConvention:
    """Resolve a convention given by name or as a callable; None selects `default`."""
    if convention is None:
        return default
    if callable(convention):
        return convention
    try:
        return NAMING_CONVENTIONS[convention]
    except KeyError:
        raise ValueError(f"Unknown naming convention: {convention}") from None
