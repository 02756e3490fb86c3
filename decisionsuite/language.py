"""
Language Detection — German or English

The one language detector in the system. Every caller that needs a
locale for copy goes through detect_language().

Numbers, acronyms (API, CRM, B2B) and capitalized name sequences are
stripped first so that product and company names do not vote.
"""

from __future__ import annotations

import re

from decisionsuite.models import Locale


_DIGITS = re.compile(r"\d+")
_ACRONYMS = re.compile(r"\b[A-Z]{2,}\b")
_PROPER_NAMES = re.compile(r"\b[A-Z][a-z]+(?:\s+[A-Z][a-z]+)*\b")

GERMAN_INDICATORS: tuple[re.Pattern, ...] = (
    re.compile(r"\b(?:sollen|müssen|wollen|können|sollte|müsste|würde|könnte)\b", re.IGNORECASE),
    re.compile(r"\b(?:oder|zwischen|für|mit|von|zu|auf|bei|über|unter)\b", re.IGNORECASE),
    re.compile(r"\b(?:entscheidung|option|ziel|annahme|wählen|entscheiden)\b", re.IGNORECASE),
    re.compile(r"\b(?:wir|uns|unser|unserer|unseren|unserem)\b", re.IGNORECASE),
    re.compile(r"\b(?:ist|sind|war|waren|wird|werden|wäre|wären)\b", re.IGNORECASE),
)

ENGLISH_INDICATORS: tuple[re.Pattern, ...] = (
    re.compile(r"\b(?:should|must|will|would|can|could|shall|may)\b", re.IGNORECASE),
    re.compile(r"\b(?:or|between|for|with|from|to|on|at|over|under)\b", re.IGNORECASE),
    re.compile(r"\b(?:decision|option|goal|objective|assumption|choose|decide)\b", re.IGNORECASE),
    re.compile(r"\b(?:we|our|us|ours)\b", re.IGNORECASE),
    re.compile(r"\b(?:is|are|was|were|will|would|be)\b", re.IGNORECASE),
)

_COMMON_GERMAN = re.compile(r"\b(?:der|die|das|und|ist|sind|in|zu|auf|für)\b", re.IGNORECASE)
_COMMON_ENGLISH = re.compile(r"\b(?:the|and|is|are|in|to|on|for|of|a|an)\b", re.IGNORECASE)


def _clean(text: str) -> str:
    cleaned = _DIGITS.sub("", text)
    cleaned = _ACRONYMS.sub("", cleaned)
    cleaned = _PROPER_NAMES.sub("", cleaned)
    return cleaned.strip()


def _score(text: str, indicators: tuple[re.Pattern, ...]) -> int:
    return sum(1 for pattern in indicators if pattern.search(text))


def language_scores(text: str) -> dict[Locale, int]:
    """Number of indicator families that match, per locale, after cleaning."""
    cleaned = _clean(text)
    return {
        Locale.DE: _score(cleaned, GERMAN_INDICATORS),
        Locale.EN: _score(cleaned, ENGLISH_INDICATORS),
    }


def detect_language(text: str) -> Locale:
    """
    Detect the dominant language of a text.

    Ties, empty input and text with no indicators fall back to English.
    """
    cleaned = _clean(text)
    if not cleaned:
        return Locale.EN

    german = _score(cleaned, GERMAN_INDICATORS)
    english = _score(cleaned, ENGLISH_INDICATORS)

    if german == 0 and english == 0:
        has_german = bool(_COMMON_GERMAN.search(cleaned))
        has_english = bool(_COMMON_ENGLISH.search(cleaned))
        if has_german and not has_english:
            return Locale.DE
        return Locale.EN

    if german > english:
        return Locale.DE
    return Locale.EN
