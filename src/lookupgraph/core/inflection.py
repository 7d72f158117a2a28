"""Naming conventions used to infer type names, foreign keys and table names.

Pluralization follows the English rule set of ActiveSupport's inflector,
including its irregular and uncountable words.
"""

from __future__ import annotations

import re
from typing import TypeAlias

_CAMEL_BOUNDARY = re.compile(r"([A-Z]+)([A-Z][a-z])|([a-z\d])([A-Z])")

_Rules: TypeAlias = tuple[tuple[re.Pattern[str], str], ...]


def _rules(*pairs: tuple[str, str]) -> _Rules:
    return tuple((re.compile(pattern, re.IGNORECASE), replacement) for pattern, replacement in pairs)


# First match wins.
_PLURALS = _rules(
    (r"(quiz)$", r"\1zes"),
    (r"^(oxen)$", r"\1"),
    (r"^(ox)$", r"\1en"),
    (r"^(m|l)ice$", r"\1ice"),
    (r"^(m|l)ouse$", r"\1ice"),
    (r"(matr|vert|ind)(?:ix|ex)$", r"\1ices"),
    (r"(x|ch|ss|sh)$", r"\1es"),
    (r"([^aeiouy]|qu)y$", r"\1ies"),
    (r"(hive)$", r"\1s"),
    (r"(?:([^f])fe|([lr])f)$", r"\1\2ves"),
    (r"sis$", "ses"),
    (r"([ti])a$", r"\1a"),
    (r"([ti])um$", r"\1a"),
    (r"(buffal|tomat)o$", r"\1oes"),
    (r"(bu)s$", r"\1ses"),
    (r"(alias|status)$", r"\1es"),
    (r"(octop|vir)i$", r"\1i"),
    (r"(octop|vir)us$", r"\1i"),
    (r"^(ax|test)is$", r"\1es"),
    (r"s$", "s"),
    (r"$", "s"),
)

_SINGULARS = _rules(
    (r"(database)s$", r"\1"),
    (r"(quiz)zes$", r"\1"),
    (r"(matr)ices$", r"\1ix"),
    (r"(vert|ind)ices$", r"\1ex"),
    (r"^(ox)en", r"\1"),
    (r"(alias|status)(es)?$", r"\1"),
    (r"(octop|vir)(us|i)$", r"\1us"),
    (r"^(a)x[ie]s$", r"\1xis"),
    (r"(cris|test)(is|es)$", r"\1is"),
    (r"(shoe)s$", r"\1"),
    (r"(o)es$", r"\1"),
    (r"(bus)(es)?$", r"\1"),
    (r"^(m|l)ice$", r"\1ouse"),
    (r"(x|ch|ss|sh)es$", r"\1"),
    (r"(m)ovies$", r"\1ovie"),
    (r"(s)eries$", r"\1eries"),
    (r"([^aeiouy]|qu)ies$", r"\1y"),
    (r"([lr])ves$", r"\1f"),
    (r"(tive)s$", r"\1"),
    (r"(hive)s$", r"\1"),
    (r"([^f])ves$", r"\1fe"),
    (r"(^analy)(sis|ses)$", r"\1sis"),
    (r"((a)naly|(b)a|(d)iagno|(p)arenthe|(p)rogno|(s)ynop|(t)he)(sis|ses)$", r"\1sis"),
    (r"([ti])a$", r"\1um"),
    (r"(n)ews$", r"\1ews"),
    (r"(ss)$", r"\1"),
    (r"s$", ""),
)

# singular -> plural; matched as word endings, so "woman" follows "man".
_IRREGULARS = {
    "person": "people",
    "man": "men",
    "child": "children",
    "sex": "sexes",
    "move": "moves",
    "zombie": "zombies",
}

_UNCOUNTABLE = re.compile(
    r"\b(?:equipment|information|rice|money|species|series|fish|sheep|jeans|police)$",
    re.IGNORECASE,
)


def underscore(word: str) -> str:
    """Convert CamelCase to snake_case; module separators become ``/``.

    >>> underscore("FooModule.BarClass")
    'foo_module/bar_class'
    """
    word = word.replace("::", "/").replace(".", "/")
    word = _CAMEL_BOUNDARY.sub(lambda m: f"{m[1] or m[3]}_{m[2] or m[4]}", word)
    return word.replace("-", "_").lower()


def camelize(word: str) -> str:
    """Convert snake_case to CamelCase."""
    return "".join(part[:1].upper() + part[1:] for part in word.split("_"))


def _inflect(word: str, rules: _Rules, irregulars: dict[str, str]) -> str:
    if not word or _UNCOUNTABLE.search(word):
        return word
    lowered = word.lower()
    for source, target in irregulars.items():
        if lowered.endswith(target):
            return word
        if lowered.endswith(source):
            return word[: len(word) - len(source)] + target
    for pattern, replacement in rules:
        if pattern.search(word):
            return pattern.sub(replacement, word, count=1)
    return word


def singularize(word: str) -> str:
    """
    >>> singularize("order_statuses")
    'order_status'
    """
    return _inflect(word, _SINGULARS, {plural: single for single, plural in _IRREGULARS.items()})


def pluralize(word: str) -> str:
    """
    >>> pluralize("person")
    'people'
    """
    return _inflect(word, _PLURALS, _IRREGULARS)


def classify(name: str) -> str:
    """Convert a table or association name to a type name.

    >>> classify("some_things")
    'SomeThing'
    """
    return camelize(singularize(name.rsplit(".", 1)[-1]))


def tableize(type_name: str) -> str:
    """Convert a type name to its table (data file) name.

    >>> tableize("FooBar")
    'foo_bars'
    """
    return pluralize(underscore(type_name))


def foreign_key(name: str) -> str:
    """Derive the foreign key attribute for a type or association name.

    >>> foreign_key("MyClassName")
    'my_class_name_id'
    """
    return underscore(name).rsplit("/", 1)[-1] + "_id"
