"""
Pydantic models for catalog items, filters, settings and persisted stores.

Catalog models mirror the documents served by the catalog provider. The
*Doc models at the bottom define the wire format of a persisted ReviewStore.
"""

from __future__ import annotations

from datetime import datetime
from enum import Enum
from typing import Literal, Optional, Union

from pydantic import BaseModel, ConfigDict, Field

from study_core import config
from study_core.memory.constants import Grade, LearningStage
from study_core.memory.memory_state import MemoryState, ReviewLog, ensure_utc
from study_core.review_store import ReviewRecord, ReviewStore


class CatalogModel(BaseModel):
    """Base for catalog documents."""
    model_config = ConfigDict(use_enum_values=True, populate_by_name=True, extra="ignore")


# ---- Declension ----

class Case(str, Enum):
    NOMINATIVE = "Nominative"
    GENITIVE = "Genitive"
    DATIVE = "Dative"
    ACCUSATIVE = "Accusative"
    INSTRUMENTAL = "Instrumental"
    LOCATIVE = "Locative"
    VOCATIVE = "Vocative"


class DeclensionGender(str, Enum):
    MASCULINE = "Masculine"
    FEMININE = "Feminine"
    NEUTER = "Neuter"
    PRONOUN = "Pronoun"


class GrammaticalNumber(str, Enum):
    SINGULAR = "Singular"
    PLURAL = "Plural"


NumberFilter = Union[GrammaticalNumber, Literal["All"]]


class DeclensionCard(CatalogModel):
    """A declension drill: decline `front` into the given case."""
    id: int
    front: str
    back: str
    declined: str
    case: Case
    gender: DeclensionGender
    number: GrammaticalNumber
    hint: Optional[str] = None
    is_custom: bool = False


class DeclensionFilters(CatalogModel):
    """Empty lists mean "any"."""
    cases: list[Case] = Field(default_factory=list)
    genders: list[DeclensionGender] = Field(default_factory=list)
    number: NumberFilter = "All"


# ---- Vocabulary ----

class PartOfSpeech(str, Enum):
    NOUN = "noun"
    VERB = "verb"
    ADJECTIVE = "adjective"
    ADVERB = "adverb"
    PRONOUN = "pronoun"
    PREPOSITION = "preposition"
    CONJUNCTION = "conjunction"
    PARTICLE = "particle"
    NUMERAL = "numeral"
    PROPER_NOUN = "proper noun"


class NounGender(str, Enum):
    MASCULINE = "masculine"
    FEMININE = "feminine"
    NEUTER = "neuter"


class ExampleSentence(BaseModel):
    """A bilingual example sentence pair."""
    polish: str
    english: str


class VocabularyWord(CatalogModel):
    """A vocabulary word; custom words carry string ids."""
    id: Union[int, str]
    polish: str
    english: str
    part_of_speech: Optional[PartOfSpeech] = None
    gender: Optional[NounGender] = None
    notes: Optional[str] = None
    examples: list[ExampleSentence] = Field(default_factory=list)
    is_custom: bool = False


class VocabularyFilters(CatalogModel):
    """Empty lists mean "any"."""
    parts_of_speech: list[PartOfSpeech] = Field(default_factory=list)
    genders: list[NounGender] = Field(default_factory=list)


# ---- Conjugation ----

class Aspect(str, Enum):
    IMPERFECTIVE = "Imperfective"
    PERFECTIVE = "Perfective"


class VerbClass(str, Enum):
    AC = "-ać"
    IC = "-ić"
    YC = "-yć"
    EC = "-eć"
    OWAC = "-ować"
    IRREGULAR = "Irregular"


class Tense(str, Enum):
    PRESENT = "present"
    PAST = "past"
    FUTURE = "future"
    IMPERATIVE = "imperative"
    CONDITIONAL = "conditional"


class Person(str, Enum):
    FIRST = "1st"
    SECOND = "2nd"
    THIRD = "3rd"


class ConjugationGender(str, Enum):
    MASCULINE = "Masculine"
    FEMININE = "Feminine"
    NEUTER = "Neuter"


class ConjugationForm(BaseModel):
    """One conjugated form and its accepted answers."""
    pl: str
    pl_alternatives: list[str] = Field(default_factory=list)
    en: list[str] = Field(default_factory=list)


class Verb(CatalogModel):
    """
    A verb with its conjugation tables, keyed tense -> form key -> form.

    Tense keys are kept as plain strings; unknown tenses are skipped when
    forms are expanded.
    """
    id: str
    infinitive: str
    infinitive_en: str
    aspect: Aspect
    verb_class: VerbClass
    is_irregular: bool = False
    is_reflexive: bool = False
    conjugations: dict[str, dict[str, ConjugationForm]] = Field(default_factory=dict)
    aspect_pair: Optional[str] = None  # Id of the other-aspect verb
    is_custom: bool = False


class DrillableForm(CatalogModel):
    """
    One drillable conjugation form; the schedulable item of the conjugation domain.

    The id is "{verb_id}:{tense}:{form_key}".
    """
    id: str
    verb: Verb
    tense: Tense
    form_key: str
    form: ConjugationForm
    person: Person
    number: GrammaticalNumber
    gender: Optional[ConjugationGender] = None

    @property
    def is_custom(self) -> bool:
        return self.verb.is_custom


class ConjugationFilters(CatalogModel):
    """Empty lists mean "any"."""
    tenses: list[Tense] = Field(default_factory=list)
    persons: list[Person] = Field(default_factory=list)
    number: NumberFilter = "All"
    aspects: list[Aspect] = Field(default_factory=list)
    verb_classes: list[VerbClass] = Field(default_factory=list)
    genders: list[ConjugationGender] = Field(default_factory=list)


# ---- Aspect Pairs ----

class AspectPairCard(CatalogModel):
    """
    An imperfective/perfective verb pair, scheduled under the id of `verb`.
    """
    verb: Verb
    pair_verb: Verb

    @property
    def id(self) -> str:
        return self.verb.id

    @property
    def is_custom(self) -> bool:
        return self.verb.is_custom


# ---- Sentences ----

class CEFRLevel(str, Enum):
    A1 = "A1"
    A2 = "A2"
    B1 = "B1"
    B2 = "B2"
    C1 = "C1"
    C2 = "C2"


ALL_LEVELS = list(CEFRLevel)


class WordAnnotation(BaseModel):
    word: str
    lemma: str
    english: str
    grammar: Optional[str] = None
    notes: Optional[str] = None


class Sentence(CatalogModel):
    """A translation drill sentence tagged with its CEFR level."""
    id: str
    polish: str
    english: str
    level: CEFRLevel
    tags: list[str] = Field(default_factory=list)
    words: list[WordAnnotation] = Field(default_factory=list)
    is_custom: bool = False


class SentenceFilters(CatalogModel):
    """Empty lists mean "any"; a sentence needs just one of the tags."""
    levels: list[CEFRLevel] = Field(default_factory=list)
    tags: list[str] = Field(default_factory=list)


# ---- Settings ----

class StudySettings(BaseModel):
    """Per-scope study settings."""
    new_items_per_day: int = Field(default_factory=config.get_default_new_items_per_day, ge=1)


class StoreScope(BaseModel):
    """One study scope, e.g. vocabulary / pl-to-en. Each owns one review store per user."""
    model_config = ConfigDict(frozen=True)

    domain: str = Field(..., min_length=1)
    direction: str = "default"

    def __str__(self) -> str:
        return f"{self.domain}/{self.direction}"


# ---- Persisted Review Store (wire format) ----

class MemoryStateDoc(BaseModel):
    stage: int = Field(..., ge=0, le=3)
    due: datetime
    stability: Optional[float] = None
    difficulty: Optional[float] = None
    step: Optional[int] = None
    reps: int = 0
    lapses: int = 0
    last_review: Optional[datetime] = None

    @classmethod
    def from_state(cls, state: MemoryState) -> "MemoryStateDoc":
        return cls(
            stage=int(state.stage),
            due=state.due,
            stability=state.stability,
            difficulty=state.difficulty,
            step=state.step,
            reps=state.reps,
            lapses=state.lapses,
            last_review=state.last_review,
        )

    def to_state(self) -> MemoryState:
        return MemoryState(
            stage=LearningStage(self.stage),
            due=ensure_utc(self.due),
            stability=self.stability,
            difficulty=self.difficulty,
            step=self.step,
            reps=self.reps,
            lapses=self.lapses,
            last_review=ensure_utc(self.last_review) if self.last_review else None,
        )


class ReviewLogDoc(BaseModel):
    grade: int = Field(..., ge=1, le=4)
    stage: int = Field(..., ge=0, le=3)
    due: datetime
    stability: Optional[float] = None
    difficulty: Optional[float] = None
    reviewed_at: datetime
    elapsed_days: float = 0.0
    scheduled_days: float = 0.0

    @classmethod
    def from_log(cls, log: ReviewLog) -> "ReviewLogDoc":
        return cls(
            grade=int(log.grade),
            stage=int(log.stage),
            due=log.due,
            stability=log.stability,
            difficulty=log.difficulty,
            reviewed_at=log.reviewed_at,
            elapsed_days=log.elapsed_days,
            scheduled_days=log.scheduled_days,
        )

    def to_log(self) -> ReviewLog:
        return ReviewLog(
            grade=Grade(self.grade),
            stage=LearningStage(self.stage),
            due=ensure_utc(self.due),
            stability=self.stability,
            difficulty=self.difficulty,
            reviewed_at=ensure_utc(self.reviewed_at),
            elapsed_days=self.elapsed_days,
            scheduled_days=self.scheduled_days,
        )


class ReviewRecordDoc(BaseModel):
    item_id: Union[int, str]
    memory_state: MemoryStateDoc
    log: Optional[ReviewLogDoc] = None


class ReviewStoreDoc(BaseModel):
    """
    Serialized ReviewStore: one document per user and scope.
    """
    records: dict[str, ReviewRecordDoc] = Field(default_factory=dict)
    reviewed_today: list[str] = Field(default_factory=list)
    new_items_today: list[str] = Field(default_factory=list)
    last_rollover_date: str

    @classmethod
    def from_store(cls, store: ReviewStore) -> "ReviewStoreDoc":
        return cls(
            records={
                key: ReviewRecordDoc(
                    item_id=record.item_id,
                    memory_state=MemoryStateDoc.from_state(record.memory_state),
                    log=ReviewLogDoc.from_log(record.log) if record.log else None,
                )
                for key, record in store.records.items()
            },
            reviewed_today=sorted(store.reviewed_today),
            new_items_today=sorted(store.new_items_today),
            last_rollover_date=store.last_rollover_date,
        )

    def to_store(self) -> ReviewStore:
        return ReviewStore(
            records={
                key: ReviewRecord(
                    item_id=doc.item_id,
                    memory_state=doc.memory_state.to_state(),
                    log=doc.log.to_log() if doc.log else None,
                )
                for key, doc in self.records.items()
            },
            reviewed_today=frozenset(self.reviewed_today),
            new_items_today=frozenset(self.new_items_today),
            last_rollover_date=self.last_rollover_date,
        )

    def to_json_dict(self) -> dict:
        """JSON-safe dict with None fields stripped."""
        return self.model_dump(mode="json", exclude_none=True)
