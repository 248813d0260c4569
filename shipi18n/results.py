"""Result types for structure-preserving JSON translation."""

import json
from dataclasses import dataclass
from typing import Any, Dict, List, Union

WARNINGS_KEY = "warnings"


@dataclass(frozen=True)
class Parsed:
    """Language entry whose payload decoded to a structured value."""

    value: Any


@dataclass(frozen=True)
class Raw:
    """Language entry kept as text because it was not valid JSON."""

    text: str


Entry = Union[Parsed, Raw]


def parse_language_payload(payload: Any) -> Entry:
    """
    Decode one per-language payload from the service.

    Strings are decoded as JSON; a string that fails to decode is kept
    as Raw. Non-string payloads are already structured.
    """
    if not isinstance(payload, str):
        return Parsed(payload)
    try:
        return Parsed(json.loads(payload))
    except json.JSONDecodeError:
        return Raw(payload)


class JSONTranslationResult(dict):
    """
    Translations keyed by language code, plus an optional "warnings" entry.

    Values are the decoded documents (or the raw text for entries that did
    not decode), so the result can be used as a plain dict. Use languages()
    to iterate language codes without the warnings entry. Languages are read
    from the dict itself, so entries added or replaced later count as Parsed.
    """

    def __init__(self, entries: Dict[str, Entry]):
        super().__init__()
        self._raw: Dict[str, str] = {}
        for lang, entry in entries.items():
            if isinstance(entry, Raw):
                self._raw[lang] = entry.text
                self[lang] = entry.text
            else:
                self[lang] = entry.value

    @classmethod
    def from_response(cls, body: Dict[str, Any]) -> "JSONTranslationResult":
        """Build a result from a decoded service response body."""
        entries = {}
        for lang, payload in body.items():
            if lang == WARNINGS_KEY:
                continue
            entries[lang] = parse_language_payload(payload)
        result = cls(entries)
        if WARNINGS_KEY in body:
            result[WARNINGS_KEY] = body[WARNINGS_KEY]
        return result

    def languages(self) -> List[str]:
        """Language codes in response order, excluding warnings."""
        return [lang for lang in self if lang != WARNINGS_KEY]

    def entry(self, lang: str) -> Entry:
        """Tagged entry for a language (KeyError if absent)."""
        if lang == WARNINGS_KEY:
            raise KeyError(lang)
        value = self[lang]
        if lang in self._raw and self._raw[lang] is value:
            return Raw(value)
        return Parsed(value)

    def raw_languages(self) -> List[str]:
        """Languages whose payload could not be decoded."""
        return [lang for lang in self.languages() if isinstance(self.entry(lang), Raw)]

    @property
    def warnings(self) -> list:
        """Warnings as sent by the service (empty list when absent)."""
        return self.get(WARNINGS_KEY) or []

    def warning_messages(self) -> List[str]:
        """Warnings flattened to strings; {"message": ...} items are unwrapped."""
        warnings = self.warnings
        if isinstance(warnings, str):
            warnings = [warnings]
        messages = []
        for warning in warnings:
            if isinstance(warning, dict):
                messages.append(str(warning.get("message", warning)))
            else:
                messages.append(str(warning))
        return messages
