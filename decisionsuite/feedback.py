"""
Feedback — Result to User-Facing Copy

Pure mapping from (hint band, primary pattern, locale) to a label,
one result sentence and, for every band except NO_HINT, a focus
question. No inference happens here; the table below is the whole
behaviour.

Lookup: COPY[locale][band][primary_pattern or "default"].
NO_HINT ignores the primary pattern and never carries a question.
"""

from __future__ import annotations

from types import MappingProxyType
from typing import Union

from decisionsuite.models import AggregatedResult, Copy, HintBand, Locale, Pattern

DEFAULT_KEY = "default"


def _frozen(table: dict) -> MappingProxyType:
    return MappingProxyType({
        key: _frozen(value) if isinstance(value, dict) else value
        for key, value in table.items()
    })


NO_HINT_COPY = MappingProxyType({
    Locale.DE: Copy(
        hint_label="Kein Strukturhinweis",
        result_line="Die Entscheidungsstruktur wirkt konsistent.",
    ),
    Locale.EN: Copy(
        hint_label="No Structural Hint",
        result_line="The decision structure appears consistent.",
    ),
})

COPY = _frozen({
    Locale.DE: {
        HintBand.CLARIFICATION_NEEDED: {
            Pattern.OBJECTIVE_VAGUENESS: Copy(
                hint_label="Klärungsbedarf",
                result_line="Das Ziel ist erkennbar, aber noch unscharf definiert.",
                focus_question="Woran würdest du in 2–4 Wochen sehen, dass es funktioniert hat?",
            ),
            Pattern.MEANS_BEFORE_ENDS: Copy(
                hint_label="Klärungsbedarf",
                result_line="Die Optionen sind klar, der Zweck dahinter bleibt aber unscharf.",
                focus_question="Welches konkrete Ergebnis soll mit diesen Optionen erreicht werden?",
            ),
            Pattern.OUTCOME_AS_VALIDATION: Copy(
                hint_label="Klärungsbedarf",
                result_line="Ein erwartetes Ergebnis wird als Annahme gesetzt, ohne Absicherung.",
                focus_question="Welche Annahme ist hier kritisch – und wie würdest du sie früh prüfen?",
            ),
            DEFAULT_KEY: Copy(
                hint_label="Klärungsbedarf",
                result_line="Einige strukturelle Punkte sind noch nicht explizit.",
                focus_question="Welche Wirkung ist entscheidend – und woran wird sie überprüft?",
            ),
        },
        HintBand.STRUCTURALLY_UNCLEAR: {
            Pattern.OBJECTIVE_VAGUENESS: Copy(
                hint_label="Strukturell unklar",
                result_line="Die Zielbeschreibung ist zu unscharf für eine belastbare Abwägung.",
                focus_question="Welche konkrete Zielgröße (Messgröße + Zeit) soll erreicht werden?",
            ),
            Pattern.MEANS_BEFORE_ENDS: Copy(
                hint_label="Strukturell unklar",
                result_line="Die Maßnahme dominiert, Ziel und Wirkung bleiben implizit.",
                focus_question="Welche Wirkung soll die Maßnahme erzeugen, und warum ist sie plausibel?",
            ),
            Pattern.OUTCOME_AS_VALIDATION: Copy(
                hint_label="Strukturell unklar",
                result_line="Mehrere Annahmen werden als sicher gesetzt, ohne Evidenz oder Tests.",
                focus_question="Welche Annahme würdest du als Erstes testen – und wie?",
            ),
            DEFAULT_KEY: Copy(
                hint_label="Strukturell unklar",
                result_line="Mehrere strukturelle Signale deuten auf Klärungsbedarf hin.",
                focus_question="Was ist Ziel, welche Optionen gibt es, und woran wird Erfolg gemessen?",
            ),
        },
    },
    Locale.EN: {
        HintBand.CLARIFICATION_NEEDED: {
            Pattern.OBJECTIVE_VAGUENESS: Copy(
                hint_label="Clarification Needed",
                result_line="The goal is recognizable but still vaguely defined.",
                focus_question="How would you see in 2–4 weeks that it has worked?",
            ),
            Pattern.MEANS_BEFORE_ENDS: Copy(
                hint_label="Clarification Needed",
                result_line="The options are clear, but the purpose behind them remains vague.",
                focus_question="What concrete outcome should be achieved with these options?",
            ),
            Pattern.OUTCOME_AS_VALIDATION: Copy(
                hint_label="Clarification Needed",
                result_line="An expected outcome is set as an assumption without validation.",
                focus_question="Which assumption is critical here – and how would you test it early?",
            ),
            DEFAULT_KEY: Copy(
                hint_label="Clarification Needed",
                result_line="Some structural points are not yet explicit.",
                focus_question="What effect is decisive – and how will it be verified?",
            ),
        },
        HintBand.STRUCTURALLY_UNCLEAR: {
            Pattern.OBJECTIVE_VAGUENESS: Copy(
                hint_label="Structurally Unclear",
                result_line="The goal description is too vague for a reliable trade-off.",
                focus_question="What concrete target metric (measure + time) should be achieved?",
            ),
            Pattern.MEANS_BEFORE_ENDS: Copy(
                hint_label="Structurally Unclear",
                result_line="The measure dominates; goal and effect remain implicit.",
                focus_question="What effect should the measure produce, and why is it plausible?",
            ),
            Pattern.OUTCOME_AS_VALIDATION: Copy(
                hint_label="Structurally Unclear",
                result_line="Several assumptions are set as certain without evidence or tests.",
                focus_question="Which assumption would you test first – and how?",
            ),
            DEFAULT_KEY: Copy(
                hint_label="Structurally Unclear",
                result_line="Several structural signals indicate a need for clarification.",
                focus_question="What is the goal, what options exist, and how is success measured?",
            ),
        },
    },
})


def resolve_copy(result: AggregatedResult, locale: Union[Locale, str]) -> Copy:
    """
    Resolve the feedback copy for an aggregated result.

    Args:
        result: The aggregated classification result.
        locale: Locale.DE / Locale.EN, or "de" / "en" in any case.
    """
    locale = Locale(locale.lower()) if isinstance(locale, str) and not isinstance(locale, Locale) else locale

    if result.hint_band == HintBand.NO_HINT:
        return NO_HINT_COPY[locale]

    key = result.primary_pattern if result.primary_pattern is not None else DEFAULT_KEY
    return COPY[locale][result.hint_band][key]
