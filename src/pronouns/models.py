# src/pronouns/models.py
from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import Any

from src.exceptions import PronounParseError

# Subjects that take plural verb agreement even without a "plural" tag
IMPLICIT_PLURAL_SUBJECTS = frozenset({"they"})


class Tag(str, Enum):
    """Markers that can follow a pronoun set, e.g. ``she/her;preferred``."""

    PREFERRED = "preferred"
    PLURAL = "plural"

    @classmethod
    def from_token(cls, token: str) -> Tag:
        try:
            return cls(token)
        except ValueError:
            raise PronounParseError(f"unknown tag: {token}", token) from None


class RecordKind(str, Enum):
    PRONOUN_SET = "pronoun_set"
    WILDCARD = "wildcard"
    NONE = "none"
    COMMENT = "comment"


@dataclass(frozen=True, slots=True)
class PronounSet:
    """
    One way to refer to a subject: subject/object plus up to three optional
    forms, filled left-to-right (possessive determiner, possessive pronoun,
    reflexive).
    """

    subject: str
    object: str
    possessive_determiner: str | None = None
    possessive_pronoun: str | None = None
    reflexive: str | None = None
    tags: frozenset[Tag] = field(default_factory=frozenset)

    def __post_init__(self) -> None:
        if not self.subject or not self.object:
            raise ValueError("subject and object are required")
        optional = (self.possessive_determiner, self.possessive_pronoun, self.reflexive)
        seen_gap = False
        for form in optional:
            if form is None:
                seen_gap = True
            elif seen_gap:
                raise ValueError("optional pronoun forms must be filled left-to-right")
        # Accept any iterable of tags but store an immutable set
        if not isinstance(self.tags, frozenset):
            object.__setattr__(self, "tags", frozenset(self.tags))

    def has_tag(self, tag: Tag) -> bool:
        return tag in self.tags

    @property
    def is_preferred(self) -> bool:
        return self.has_tag(Tag.PREFERRED)

    @property
    def is_plural(self) -> bool:
        return self.has_tag(Tag.PLURAL) or self.subject in IMPLICIT_PLURAL_SUBJECTS

    def components(self) -> tuple[str, ...]:
        forms = (
            self.subject,
            self.object,
            self.possessive_determiner,
            self.possessive_pronoun,
            self.reflexive,
        )
        return tuple(f for f in forms if f is not None)

    def to_canonical_string(self) -> str:
        out = "/".join(self.components())
        for token in sorted(t.value for t in self.tags):
            out += f";{token}"
        return out

    def to_dict(self) -> dict[str, Any]:
        return {
            "subject": self.subject,
            "object": self.object,
            "possessive_determiner": self.possessive_determiner,
            "possessive_pronoun": self.possessive_pronoun,
            "reflexive": self.reflexive,
            "tags": sorted(t.value for t in self.tags),
            "canonical": self.to_canonical_string(),
        }

    def __str__(self) -> str:
        return self.to_canonical_string()


# -----------------------------
# Record variants
# -----------------------------


def _with_comment(base: str, comment: str | None) -> str:
    if not comment:
        return base
    return f"{base} # {comment}"


@dataclass(frozen=True, slots=True)
class PronounSetRecord:
    pronoun_set: PronounSet
    raw: str
    comment: str | None = None

    kind = RecordKind.PRONOUN_SET

    def __str__(self) -> str:
        return _with_comment(self.pronoun_set.to_canonical_string(), self.comment)


@dataclass(frozen=True, slots=True)
class WildcardRecord:
    raw: str
    comment: str | None = None

    kind = RecordKind.WILDCARD

    def __str__(self) -> str:
        return _with_comment("*", self.comment)


@dataclass(frozen=True, slots=True)
class NoneRecord:
    raw: str
    comment: str | None = None

    kind = RecordKind.NONE

    def __str__(self) -> str:
        return _with_comment("!", self.comment)


@dataclass(frozen=True, slots=True)
class CommentRecord:
    raw: str
    comment: str = ""

    kind = RecordKind.COMMENT

    def __str__(self) -> str:
        return f"# {self.comment}"


Record = PronounSetRecord | WildcardRecord | NoneRecord | CommentRecord


# -----------------------------
# Result type
# -----------------------------


@dataclass(frozen=True, slots=True)
class PronounResult:
    """
    Outcome of selecting over one subject's records.

    preferred is None only when the subject prefers to be referred to by name.
    """

    preferred: PronounSet | None
    all_sets: tuple[PronounSet, ...] = ()
    accepts_any: bool = False
    prefers_name: bool = False

    def __post_init__(self) -> None:
        if not isinstance(self.all_sets, tuple):
            object.__setattr__(self, "all_sets", tuple(self.all_sets))
        if self.prefers_name:
            if self.accepts_any:
                raise ValueError("prefers_name and accepts_any are mutually exclusive")
            if self.preferred is not None or self.all_sets:
                raise ValueError("a prefers_name result carries no pronoun sets")

    @classmethod
    def standard(cls, preferred: PronounSet, all_sets: tuple[PronounSet, ...]) -> PronounResult:
        return cls(preferred=preferred, all_sets=all_sets)

    @classmethod
    def wildcard(cls, preferred: PronounSet, all_sets: tuple[PronounSet, ...]) -> PronounResult:
        return cls(preferred=preferred, all_sets=all_sets, accepts_any=True)

    @classmethod
    def none(cls) -> PronounResult:
        return cls(preferred=None, prefers_name=True)

    def to_dict(self) -> dict[str, Any]:
        return {
            "preferred": self.preferred.to_dict() if self.preferred else None,
            "all_sets": [s.to_canonical_string() for s in self.all_sets],
            "accepts_any": self.accepts_any,
            "prefers_name": self.prefers_name,
        }

    def __str__(self) -> str:
        if self.prefers_name:
            return "PronounResult(prefers_name=True)"
        parts = [f"preferred={self.preferred}"]
        if self.accepts_any:
            parts.append("accepts_any=True")
        if self.all_sets:
            parts.append("all_sets=[" + ", ".join(str(s) for s in self.all_sets) + "]")
        return "PronounResult(" + ", ".join(parts) + ")"


__all__ = [
    "IMPLICIT_PLURAL_SUBJECTS",
    "Tag",
    "RecordKind",
    "PronounSet",
    "PronounSetRecord",
    "WildcardRecord",
    "NoneRecord",
    "CommentRecord",
    "Record",
    "PronounResult",
]
