"""Per-thread persona overrides and their validation rules."""

import unicodedata
from dataclasses import dataclass
from typing import Dict, Optional

from chatwidgets.config import Settings
from chatwidgets.core.errors import InvalidArgumentError

_ALLOWED_CONTROL_CHARACTERS = {"\n", "\r", "\t"}


@dataclass(frozen=True)
class PersonaOptions:
    """Persona behaviour of the orchestration service."""

    enabled: bool = False
    default_persona: Optional[str] = None
    max_length: int = 2000
    reject_control_characters: bool = True

    @classmethod
    def from_settings(cls, settings: Settings) -> "PersonaOptions":
        return cls(
            enabled=settings.enable_persona,
            default_persona=normalize_persisted_persona(settings.default_persona),
            max_length=settings.max_persona_length,
            reject_control_characters=settings.reject_persona_control_characters,
        )


def _check_persona(persona: str, max_length: int, reject_control_characters: bool) -> None:
    if len(persona) > max_length:
        raise InvalidArgumentError(
            f"Persona exceeds maximum length of {max_length} characters",
            parameter="persona",
        )
    if reject_control_characters and any(
        unicodedata.category(ch) == "Cc" and ch not in _ALLOWED_CONTROL_CHARACTERS for ch in persona
    ):
        raise InvalidArgumentError(
            "Persona contains unsupported control characters", parameter="persona"
        )


def normalize_incoming_persona(
    persona: Optional[str],
    max_length: int = 2000,
    reject_control_characters: bool = True,
) -> Optional[str]:
    """Normalize a persona supplied with a request.

    Args:
        persona: Raw persona text; None means "leave unchanged"
        max_length: Maximum length after trimming
        reject_control_characters: Reject control characters other than newline,
            carriage return and tab

    Returns:
        None if persona is None, "" if it is blank (clear the override),
        otherwise the trimmed text

    Raises:
        InvalidArgumentError: If the trimmed text is too long or has disallowed characters
    """
    if persona is None:
        return None
    trimmed = persona.strip()
    if not trimmed:
        return ""
    _check_persona(trimmed, max_length, reject_control_characters)
    return trimmed


def normalize_persisted_persona(persona: Optional[str]) -> Optional[str]:
    """Trim a stored persona, mapping blank text to None."""
    if persona is None:
        return None
    trimmed = persona.strip()
    return trimmed or None


def validate_persona_settings(settings: Settings) -> None:
    """Validate the configured default persona at startup.

    Raises:
        InvalidArgumentError: If the default persona violates the guardrails
    """
    default = normalize_persisted_persona(settings.default_persona)
    if default is not None:
        _check_persona(
            default,
            settings.max_persona_length,
            settings.reject_persona_control_characters,
        )


class ThreadPersonaStore:
    """In-memory persona overrides keyed by thread ID."""

    def __init__(self) -> None:
        self._personas: Dict[str, str] = {}

    def get_persona(self, thread_id: str) -> Optional[str]:
        return self._personas.get(thread_id)

    def set_persona(self, thread_id: str, persona: str) -> None:
        normalized = normalize_persisted_persona(persona)
        if normalized is None:
            self._personas.pop(thread_id, None)
        else:
            self._personas[thread_id] = normalized

    def clear_persona(self, thread_id: str) -> None:
        self._personas.pop(thread_id, None)
