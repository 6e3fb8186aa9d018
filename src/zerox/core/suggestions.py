"""
Keyword suggestions for parser diagnostics.

When the parser rejects a word in a keyword position it asks this module for
a correction. Habits carried over from HTML/JS/Python are matched against a
fixed hint table first; otherwise the nearest known keyword by edit distance
is proposed, provided it is close enough to be a plausible typo.
"""

from __future__ import annotations

from collections.abc import Iterable
from types import MappingProxyType

MAX_SUGGESTION_DISTANCE = 2

COMMON_MISTAKES = MappingProxyType(
    {
        # Markup containers
        "div": "Use 'layout' for containers (layout col:, layout row:)",
        "span": "Use 'layout' for containers (layout col:, layout row:)",
        "section": "Use 'layout' for containers (layout col:, layout row:)",
        # Text elements
        "p": "Use 'text' to display text (text \"Hello\")",
        "label": "Use 'text' to display text (text \"Hello\")",
        "h1": "Use 'text' with a size prop (text \"Title\" size=2xl)",
        "h2": "Use 'text' with a size prop (text \"Title\" size=xl)",
        "h3": "Use 'text' with a size prop (text \"Title\" size=lg)",
        # Variable declarations
        "let": "Use 'state' for reactive variables (state count: int = 0)",
        "var": "Use 'state' for reactive variables (state count: int = 0)",
        "const": "Use 'state' for reactive variables (state count: int = 0)",
        # Functions
        "function": "Use 'fn' to declare functions (fn increment():)",
        "def": "Use 'fn' to declare functions (fn increment():)",
        "func": "Use 'fn' to declare functions (fn increment():)",
        # Event handlers
        "onclick": "Use 'button' with an action (button \"Save\" -> save())",
        "onClick": "Use 'button' with an action (button \"Save\" -> save())",
        "onchange": "Use 'input' with a binding (input query placeholder=\"Search\")",
        "onChange": "Use 'input' with a binding (input query placeholder=\"Search\")",
        "onInput": "Use 'input' with a binding (input query placeholder=\"Search\")",
    }
)


def levenshtein(a: str, b: str) -> int:
    """
    Compute the edit distance between two strings.

    Insertions, deletions and substitutions all cost 1. Uses a single
    rolling row of the dynamic-programming table.
    """
    if len(a) < len(b):
        a, b = b, a

    previous = list(range(len(b) + 1))
    for i, ca in enumerate(a, start=1):
        current = [i]
        for j, cb in enumerate(b, start=1):
            cost = 0 if ca == cb else 1
            current.append(
                min(
                    previous[j] + 1,  # deletion
                    current[j - 1] + 1,  # insertion
                    previous[j - 1] + cost,  # substitution
                )
            )
        previous = current

    return previous[-1]


def suggest_keyword(word: str, candidates: Iterable[str]) -> str | None:
    """
    Return the candidate closest to ``word``.

    Only distances up to MAX_SUGGESTION_DISTANCE qualify; on a tie the
    candidate listed first wins.

    Args:
        word: The unrecognized word
        candidates: Known keywords, in preference order

    Returns:
        The best candidate, or None when nothing is close enough
    """
    best: str | None = None
    best_distance = MAX_SUGGESTION_DISTANCE + 1

    for candidate in candidates:
        distance = levenshtein(word, candidate)
        if distance < best_distance:
            best = candidate
            best_distance = distance

    return best


def common_mistake_hint(word: str) -> str | None:
    """Return the targeted hint for a known wrong-ecosystem idiom, if any."""
    return COMMON_MISTAKES.get(word)


def format_suggestion(word: str, candidates: Iterable[str]) -> str | None:
    """
    Build the text appended to an "unknown keyword" error.

    The common-mistakes table is consulted before edit distance.

    Returns:
        A hint, "Did you mean '<x>'?", or None
    """
    hint = common_mistake_hint(word)
    if hint:
        return hint

    suggestion = suggest_keyword(word, candidates)
    if suggestion is not None and suggestion != word:
        return f"Did you mean '{suggestion}'?"
    return None
