"""
Vocabulary — Keyword Tables for Flag Derivation

Every text heuristic the suite applies is declared here as data.
Extending detection means adding a term to a table, never adding a
branch to the deriver.

Matching is case-insensitive substring containment. Terms are stored
lowercase. Each table is keyed by locale; the deriver matches the
union of all locales, so a German objective and English options are
evaluated against the same rules.

Rules are FROZEN at import time (tuples, frozen dataclasses,
MappingProxyType). They cannot be changed at runtime.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from types import MappingProxyType

from decisionsuite.models import Locale


# ============================================================
# KEYWORD TABLES
# ============================================================

EFFECT_TERMS = MappingProxyType({
    Locale.EN: ("reduce", "increase", "improve", "decrease", "minimize", "maximize"),
    Locale.DE: ("reduzieren", "erhöhen", "verbessern", "verringern", "minimieren", "maximieren"),
})

CONSTRAINT_TERMS = MappingProxyType({
    Locale.EN: ("cost", "time", "risk", "quality", "budget", "deadline", "resources"),
    Locale.DE: ("kosten", "zeit", "risiko", "qualität", "budget", "frist", "ressourcen"),
})

IMPLEMENTATION_TERMS = MappingProxyType({
    Locale.EN: ("tool", "software", "platform", "system", "service", "vendor"),
    Locale.DE: ("tool", "software", "plattform", "system", "dienst", "anbieter"),
})

STATUS_QUO_TERMS = MappingProxyType({
    Locale.EN: ("status quo", "current", "existing", "keep", "stay"),
    Locale.DE: ("bestehend", "aktuell", "behalten", "bleiben"),
})

CAUSAL_TERMS = MappingProxyType({
    Locale.EN: ("because", "due to"),
    Locale.DE: ("weil", "aufgrund"),
})

OUTCOME_TERMS = MappingProxyType({
    Locale.EN: ("result", "outcome", "success", "failure", "win", "lose"),
    Locale.DE: ("ergebnis", "erfolg", "misserfolg", "gewinn", "verlust"),
})

HEDGE_TERMS = MappingProxyType({
    Locale.EN: ("maybe", "perhaps", "possibly", "might", "could", "uncertain"),
    Locale.DE: ("vielleicht", "möglicherweise", "könnte", "unsicher"),
})


def all_terms(table: MappingProxyType) -> tuple[str, ...]:
    """Union of a table's terms across locales, first occurrence wins."""
    seen: dict[str, None] = {}
    for locale in Locale:
        for term in table.get(locale, ()):
            seen.setdefault(term, None)
    return tuple(seen)


# ============================================================
# KEYWORD RULES
# ============================================================

class Source(str, Enum):
    """Which artifact text a rule reads."""
    OBJECTIVE = "objective"
    PROBLEM_STATEMENT = "problem_statement"
    OPTIONS = "options"
    ASSUMPTIONS = "assumptions"


class Quantifier(str, Enum):
    """How per-text matches combine into one boolean."""
    ANY = "any"                      # at least one text contains a term
    NONE = "none"                    # no text contains a term
    EVERY_WITHOUT = "every_without"  # texts exist and none contains a term


@dataclass(frozen=True)
class KeywordRule:
    """
    Maps one vocabulary table onto one classifier flag.

    ``requires`` lists sources that must be non-empty for the rule to
    fire at all; otherwise the flag is False.
    """
    flag: str
    source: Source
    table: MappingProxyType
    quantifier: Quantifier
    description: str
    requires: tuple[Source, ...] = ()

    @property
    def terms(self) -> tuple[str, ...]:
        return all_terms(self.table)


KEYWORD_RULES: tuple[KeywordRule, ...] = (
    KeywordRule(
        flag="objective_is_effect",
        source=Source.OBJECTIVE,
        table=EFFECT_TERMS,
        quantifier=Quantifier.ANY,
        description="The objective names an effect to achieve.",
    ),
    KeywordRule(
        flag="objective_has_constraints",
        source=Source.OBJECTIVE,
        table=CONSTRAINT_TERMS,
        quantifier=Quantifier.ANY,
        description="The objective mentions cost, time, risk, quality or similar limits.",
    ),
    KeywordRule(
        flag="options_are_implementations",
        source=Source.OPTIONS,
        table=IMPLEMENTATION_TERMS,
        quantifier=Quantifier.ANY,
        description="At least one option is a concrete tool, system or vendor.",
    ),
    KeywordRule(
        flag="status_quo_excluded",
        source=Source.OPTIONS,
        table=STATUS_QUO_TERMS,
        quantifier=Quantifier.NONE,
        description="No option keeps the current state.",
    ),
    KeywordRule(
        flag="causal_link_explicit",
        source=Source.PROBLEM_STATEMENT,
        table=CAUSAL_TERMS,
        quantifier=Quantifier.ANY,
        description="The problem statement names a cause.",
        requires=(Source.OBJECTIVE, Source.PROBLEM_STATEMENT),
    ),
    KeywordRule(
        flag="assumptions_are_outcomes",
        source=Source.ASSUMPTIONS,
        table=OUTCOME_TERMS,
        quantifier=Quantifier.ANY,
        description="An assumption states a result rather than a precondition.",
    ),
    KeywordRule(
        flag="assumptions_are_guaranteed",
        source=Source.ASSUMPTIONS,
        table=HEDGE_TERMS,
        quantifier=Quantifier.EVERY_WITHOUT,
        description="Assumptions exist and none of them is hedged.",
    ),
)


def rules_catalogue() -> list[dict]:
    """Reviewable dump of every keyword rule, used by GET /patterns."""
    return [
        {
            "flag": rule.flag,
            "source": rule.source.value,
            "quantifier": rule.quantifier.value,
            "requires": [s.value for s in rule.requires],
            "description": rule.description,
            "terms": {locale.value: list(rule.table.get(locale, ())) for locale in Locale},
        }
        for rule in KEYWORD_RULES
    ]
