"""Canonical display-language definitions for workspace files.

Maps file extensions and exact filenames to the editor language tag used
when showing a workspace file. The table is a static enumeration; content
is never sniffed.

Detection order (see detect_display_language):
1. Exact filename match (case-sensitive, e.g. "Dockerfile")
2. Last extension, case-insensitive
3. PLAINTEXT
"""

from __future__ import annotations

import re
from dataclasses import dataclass, field

PLAINTEXT = "plaintext"
ABAP = "abap"

_EXTENSION_RE = re.compile(r"\.([a-z0-9]+)$", re.IGNORECASE)


@dataclass(frozen=True, slots=True)
class DisplayLanguage:
    """Editor language tag and the files it covers.

    Attributes:
        name: Editor language identifier (e.g., "typescript")
        extensions: Extensions without the dot, lowercase
        filenames: Exact filenames, matched case-sensitively
    """

    name: str
    extensions: frozenset[str]
    filenames: frozenset[str] = field(default_factory=frozenset)


# RULES:
# 1. Extensions are stored lowercase without the leading dot
# 2. An extension belongs to exactly one language
ALL_DISPLAY_LANGUAGES: tuple[DisplayLanguage, ...] = (
    DisplayLanguage(name="typescript", extensions=frozenset({"ts", "tsx"})),
    DisplayLanguage(name="javascript", extensions=frozenset({"js", "jsx", "cjs", "mjs"})),
    DisplayLanguage(name="json", extensions=frozenset({"json"})),
    DisplayLanguage(name="css", extensions=frozenset({"css"})),
    DisplayLanguage(name="scss", extensions=frozenset({"scss"})),
    DisplayLanguage(name="less", extensions=frozenset({"less"})),
    DisplayLanguage(name="html", extensions=frozenset({"html"})),
    DisplayLanguage(name="markdown", extensions=frozenset({"md"})),
    DisplayLanguage(name="yaml", extensions=frozenset({"yml", "yaml"})),
    DisplayLanguage(name="xml", extensions=frozenset({"xml"})),
    DisplayLanguage(name="shell", extensions=frozenset({"sh", "bash"})),
    DisplayLanguage(name="sql", extensions=frozenset({"sql"})),
    DisplayLanguage(name="python", extensions=frozenset({"py"})),
    DisplayLanguage(name="go", extensions=frozenset({"go"})),
    DisplayLanguage(name="rust", extensions=frozenset({"rs"})),
    DisplayLanguage(name="java", extensions=frozenset({"java"})),
    DisplayLanguage(name="toml", extensions=frozenset({"toml"})),
    DisplayLanguage(name="dockerfile", extensions=frozenset(), filenames=frozenset({"Dockerfile"})),
    DisplayLanguage(name="makefile", extensions=frozenset(), filenames=frozenset({"Makefile"})),
)


def _build_extension_map() -> dict[str, str]:
    result: dict[str, str] = {}
    for lang in ALL_DISPLAY_LANGUAGES:
        for ext in lang.extensions:
            if ext in result:
                raise ValueError(f"Extension '{ext}' mapped twice ({result[ext]}, {lang.name})")
            result[ext] = lang.name
    return result


def _build_filename_map() -> dict[str, str]:
    return {
        filename: lang.name for lang in ALL_DISPLAY_LANGUAGES for filename in lang.filenames
    }


EXTENSION_TO_LANGUAGE: dict[str, str] = _build_extension_map()

FILENAME_TO_LANGUAGE: dict[str, str] = _build_filename_map()


def extension_of(name: str) -> str | None:
    """Lowercased trailing alphanumeric extension of a filename, without the dot."""
    match = _EXTENSION_RE.search(name)
    if match is None:
        return None
    return match.group(1).lower()


def detect_display_language(base_name: str) -> str:
    """Detect the editor language for a base filename.

    Args:
        base_name: Last path segment (e.g., "panel.tsx", "Dockerfile")

    Returns:
        Language tag, PLAINTEXT when unknown.
    """
    if name := FILENAME_TO_LANGUAGE.get(base_name):
        return name
    ext = extension_of(base_name)
    if ext is None:
        return PLAINTEXT
    return EXTENSION_TO_LANGUAGE.get(ext, PLAINTEXT)
