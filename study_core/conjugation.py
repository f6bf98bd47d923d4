"""
Conjugation drill - expand verbs into drillable forms and aspect pairs

Each conjugated form of a verb (one tense, one form key) is scheduled as its
own item. Form keys encode person, number and optional gender, e.g. "1sg",
"3pl" or "2sg_f".

Verbs that name their other-aspect partner also form aspect-pair cards,
scheduled as a separate domain.
"""

from __future__ import annotations
import re
from typing import Iterable, Optional

from study_core.schemas import (
    AspectPairCard,
    ConjugationGender,
    DrillableForm,
    GrammaticalNumber,
    Person,
    Tense,
    Verb,
)

FORM_KEY_PATTERN = re.compile(r"^(\d)(sg|pl)(?:_([mfn]))?$")

PERSONS = {"1": Person.FIRST, "2": Person.SECOND, "3": Person.THIRD}
NUMBERS = {"sg": GrammaticalNumber.SINGULAR, "pl": GrammaticalNumber.PLURAL}
GENDERS = {"m": ConjugationGender.MASCULINE, "f": ConjugationGender.FEMININE, "n": ConjugationGender.NEUTER}

_PERSON_NUMBER_KEYS = ["1sg", "2sg", "3sg", "1pl", "2pl", "3pl"]
_GENDERED_KEYS = [
    "1sg_m", "1sg_f", "2sg_m", "2sg_f", "3sg_m", "3sg_f", "3sg_n",
    "1pl_m", "1pl_f", "2pl_m", "2pl_f", "3pl_m", "3pl_f",
]

# Drill order of form keys per tense
FORM_KEYS: dict[Tense, list[str]] = {
    Tense.PRESENT: _PERSON_NUMBER_KEYS,
    Tense.PAST: _GENDERED_KEYS,
    Tense.FUTURE: _PERSON_NUMBER_KEYS,
    Tense.IMPERATIVE: ["2sg", "1pl", "2pl"],
    Tense.CONDITIONAL: _GENDERED_KEYS,
}


def parse_form_key(form_key: str) -> tuple[Person, GrammaticalNumber, Optional[ConjugationGender]]:
    """
    Split a form key into person, number and gender.

    Args:
        form_key: Key such as "1sg", "3pl" or "2sg_f"

    Returns:
        (person, number, gender); gender is None for ungendered keys

    Raises:
        ValueError: If the key is malformed
    """
    match = FORM_KEY_PATTERN.match(form_key)
    if not match or match.group(1) not in PERSONS:
        raise ValueError(f"Invalid form key: {form_key}")
    person_num, number, gender = match.groups()
    return PERSONS[person_num], NUMBERS[number], GENDERS.get(gender) if gender else None


def form_id(verb_id: str, tense: str, form_key: str) -> str:
    return f"{verb_id}:{tense}:{form_key}"


def split_form_id(full_id: str) -> tuple[str, str, str]:
    """Inverse of form_id: (verb_id, tense, form_key)."""
    parts = full_id.split(":")
    if len(parts) != 3:
        raise ValueError(f"Invalid form id: {full_id}")
    return parts[0], parts[1], parts[2]


def drillable_forms(verb: Verb) -> list[DrillableForm]:
    """
    Expand a verb into one DrillableForm per conjugated form it defines.

    Tenses are visited in a fixed order and form keys in drill order; keys
    missing from the verb's tables are skipped.
    """
    forms = []
    for tense, form_keys in FORM_KEYS.items():
        table = verb.conjugations.get(tense.value)
        if not table:
            continue
        for form_key in form_keys:
            form = table.get(form_key)
            if form is None:
                continue
            person, number, gender = parse_form_key(form_key)
            forms.append(DrillableForm(
                id=form_id(verb.id, tense.value, form_key),
                verb=verb,
                tense=tense,
                form_key=form_key,
                form=form,
                person=person,
                number=number,
                gender=gender,
            ))
    return forms


def expand_verbs(verbs: Iterable[Verb]) -> list[DrillableForm]:
    """Drillable forms of every verb, in catalog order."""
    return [form for verb in verbs for form in drillable_forms(verb)]


def aspect_pairs(verbs: Iterable[Verb]) -> list[AspectPairCard]:
    """
    One card per aspect pair, keyed by whichever verb of the pair comes first.

    Verbs without a pair, or whose pair is not in `verbs`, are skipped.
    """
    verbs = list(verbs)
    by_id = {verb.id: verb for verb in verbs}
    seen: set[tuple[str, ...]] = set()
    cards = []
    for verb in verbs:
        pair_verb = by_id.get(verb.aspect_pair) if verb.aspect_pair else None
        if pair_verb is None:
            continue
        pair_key = tuple(sorted((verb.id, pair_verb.id)))
        if pair_key in seen:
            continue
        seen.add(pair_key)
        cards.append(AspectPairCard(verb=verb, pair_verb=pair_verb))
    return cards
