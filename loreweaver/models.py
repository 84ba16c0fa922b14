#!/usr/bin/env python3
"""
Name Catalog Records
====================
Typed records for catalog entries and their declared relations.

The JSON catalog (names.json) uses camelCase keys; from_dict()/to_dict()
translate between that wire format and these records.
"""

from dataclasses import dataclass
from enum import Enum
from typing import Optional, Tuple


class NameType(Enum):
    """Whether a name is used as a given name, a family name or both"""
    FIRST_NAME = "firstName"
    SURNAME = "surname"
    EITHER = "either"


class Gender(Enum):
    MASCULINE = "masculine"
    FEMININE = "feminine"
    NEUTRAL = "neutral"
    ANY = "any"


class NameStatus(Enum):
    """Status of a name in the catalog"""
    AVAILABLE = "available"        # Free to use
    USED = "used"                  # Already given to a character/project
    BLOCKED = "blocked"            # Excluded from use


class RelationType(Enum):
    """Kinds of explicitly declared relations between names"""
    ALTERNATE_SPELLING = "alternateSpelling"
    DIMINUTIVE = "diminutive"
    MASCULINE_FORM = "masculineForm"
    FEMININE_FORM = "feminineForm"
    NEUTRAL_FORM = "neutralForm"
    OTHER_LANGUAGE = "otherLanguage"
    FULL_FORM = "fullForm"


def _optional_enum(enum_cls, value):
    return enum_cls(value) if value else None


def _strings(value) -> Tuple[str, ...]:
    if not value:
        return ()
    if isinstance(value, str):
        return (value,)
    return tuple(str(v) for v in value)


def _compact(data: dict) -> dict:
    """Drop keys whose value is None so optional fields stay absent."""
    return {k: v for k, v in data.items() if v is not None}


@dataclass(frozen=True)
class RelatedName:
    """A declared variant of a name (diminutive, other-language form, ...)"""
    type: RelationType
    name: str
    pronunciation: Optional[str] = None
    script: Optional[str] = None
    etymology: Optional[str] = None
    gender: Optional[Gender] = None
    feelings: Tuple[str, ...] = ()
    alternate_origin: Optional[str] = None   # replaces the origin for otherLanguage forms
    notes: Optional[str] = None

    @classmethod
    def from_dict(cls, data: dict) -> 'RelatedName':
        return cls(
            type=RelationType(data['type']),
            name=data['name'],
            pronunciation=data.get('pronunciation'),
            script=data.get('script'),
            etymology=data.get('etymology'),
            gender=_optional_enum(Gender, data.get('gender')),
            feelings=_strings(data.get('feelings')),
            alternate_origin=data.get('alternateOrigin'),
            notes=data.get('notes'),
        )

    def to_dict(self) -> dict:
        return _compact({
            'type': self.type.value,
            'name': self.name,
            'pronunciation': self.pronunciation,
            'script': self.script,
            'etymology': self.etymology,
            'gender': self.gender.value if self.gender else None,
            'feelings': list(self.feelings) if self.feelings else None,
            'alternateOrigin': self.alternate_origin,
            'notes': self.notes,
        })


@dataclass(frozen=True)
class Name:
    """A catalog entry with full metadata"""
    id: str
    name: str
    name_type: NameType = NameType.EITHER
    gender: Optional[Gender] = None

    # Taxonomies (paths joined by " > ")
    origin: Tuple[str, ...] = ()
    meanings: Tuple[str, ...] = ()

    # Linguistic detail
    meaning: Optional[str] = None          # literal translation
    etymology: Optional[str] = None
    pronunciation: Optional[str] = None    # syllables separated by "-"
    roots: Tuple[str, ...] = ()
    feelings: Tuple[str, ...] = ()
    related_names: Tuple[RelatedName, ...] = ()

    # Workflow
    status: NameStatus = NameStatus.AVAILABLE
    blocked_reason: Optional[str] = None
    used_in: Optional[str] = None

    # Display only
    script: Optional[str] = None
    notes: Optional[str] = None
    created_at: Optional[str] = None

    @property
    def related_name_strings(self) -> Tuple[str, ...]:
        return tuple(r.name for r in self.related_names)

    @classmethod
    def from_dict(cls, data: dict) -> 'Name':
        """
        Build a Name from a names.json record.

        Raises:
            KeyError: If id or name is missing
            ValueError: If an enum field holds an unknown value
        """
        return cls(
            id=str(data['id']),
            name=data['name'],
            name_type=NameType(data.get('nameType') or NameType.EITHER.value),
            gender=_optional_enum(Gender, data.get('gender')),
            origin=_strings(data.get('origin')),
            meanings=_strings(data.get('meanings')),
            meaning=data.get('meaning'),
            etymology=data.get('etymology'),
            pronunciation=data.get('pronunciation'),
            roots=_strings(data.get('roots')),
            feelings=_strings(data.get('feelings')),
            related_names=tuple(
                RelatedName.from_dict(r) for r in data.get('relatedNames') or ()
            ),
            status=NameStatus(data.get('status') or NameStatus.AVAILABLE.value),
            blocked_reason=data.get('blockedReason'),
            used_in=data.get('usedIn'),
            script=data.get('script'),
            notes=data.get('notes'),
            created_at=data.get('createdAt'),
        )

    def to_dict(self) -> dict:
        return _compact({
            'id': self.id,
            'name': self.name,
            'nameType': self.name_type.value,
            'script': self.script,
            'meanings': list(self.meanings),
            'meaning': self.meaning,
            'etymology': self.etymology,
            'pronunciation': self.pronunciation,
            'origin': list(self.origin) if self.origin else None,
            'gender': self.gender.value if self.gender else None,
            'feelings': list(self.feelings),
            'notes': self.notes,
            'roots': list(self.roots) if self.roots else None,
            'relatedNames': [r.to_dict() for r in self.related_names] or None,
            'status': self.status.value,
            'blockedReason': self.blocked_reason,
            'usedIn': self.used_in,
            'createdAt': self.created_at,
        })


@dataclass(frozen=True)
class BlockedPair:
    """A first name + surname combination that must not be generated together"""
    id: str
    first_name: str
    surname: str
    reason: Optional[str] = None
    notes: Optional[str] = None
    created_at: Optional[str] = None

    def matches(self, first_name: str, surname: str) -> bool:
        """Case-insensitive comparison with a candidate pair."""
        return (self.first_name.lower() == first_name.lower() and
                self.surname.lower() == surname.lower())

    @classmethod
    def from_dict(cls, data: dict) -> 'BlockedPair':
        return cls(
            id=str(data['id']),
            first_name=data['firstName'],
            surname=data['surname'],
            reason=data.get('reason'),
            notes=data.get('notes'),
            created_at=data.get('createdAt'),
        )

    def to_dict(self) -> dict:
        return _compact({
            'id': self.id,
            'firstName': self.first_name,
            'surname': self.surname,
            'reason': self.reason,
            'notes': self.notes,
            'createdAt': self.created_at,
        })


__all__ = [
    'NameType',
    'Gender',
    'NameStatus',
    'RelationType',
    'RelatedName',
    'Name',
    'BlockedPair',
]
