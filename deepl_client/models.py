"""Response shapes of the DeepL API and their JSON schemas.

Each shape exposes ``SCHEMA`` (validated with jsonschema before construction) and
``from_dict``. Absent or null fields take zero values, as does a null document;
wrongly-typed ones are rejected.
"""
from __future__ import annotations
from dataclasses import dataclass, field
from typing import Any, ClassVar, Dict, Optional, Tuple


@dataclass(frozen=True)
class AccountStatus:
    character_count: int = 0
    character_limit: int = 0

    SCHEMA: ClassVar[Dict[str, Any]] = {
        'type': ['object', 'null'],
        'properties': {
            'character_count': {'type': ['integer', 'null'], 'minimum': 0},
            'character_limit': {'type': ['integer', 'null'], 'minimum': 0},
        },
    }

    @classmethod
    def from_dict(cls, data: Optional[Dict[str, Any]]) -> 'AccountStatus':
        data = data or {}
        return cls(
            character_count=int(data.get('character_count') or 0),
            character_limit=int(data.get('character_limit') or 0),
        )

    @property
    def remaining(self) -> int:
        return max(self.character_limit - self.character_count, 0)


@dataclass(frozen=True)
class Translation:
    detected_source_language: str = ''
    text: str = ''


_TRANSLATION_SCHEMA: Dict[str, Any] = {
    'type': ['object', 'null'],
    'properties': {
        'detected_source_language': {'type': ['string', 'null']},
        'text': {'type': ['string', 'null']},
    },
}


@dataclass(frozen=True)
class TranslateResult:
    translations: Tuple[Translation, ...] = field(default_factory=tuple)

    SCHEMA: ClassVar[Dict[str, Any]] = {
        'type': ['object', 'null'],
        'properties': {
            'translations': {'type': ['array', 'null'], 'items': _TRANSLATION_SCHEMA},
        },
    }

    @classmethod
    def from_dict(cls, data: Optional[Dict[str, Any]]) -> 'TranslateResult':
        items = (data or {}).get('translations') or []
        return cls(tuple(
            Translation(
                detected_source_language=(item or {}).get('detected_source_language') or '',
                text=(item or {}).get('text') or '',
            )
            for item in items
        ))

    @property
    def texts(self) -> Tuple[str, ...]:
        return tuple(t.text for t in self.translations)


@dataclass(frozen=True)
class ErrorBody:
    message: str = ''

    SCHEMA: ClassVar[Dict[str, Any]] = {
        'type': ['object', 'null'],
        'properties': {
            'message': {'type': ['string', 'null']},
        },
    }

    @classmethod
    def from_dict(cls, data: Optional[Dict[str, Any]]) -> 'ErrorBody':
        return cls(message=(data or {}).get('message') or '')
