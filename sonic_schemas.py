"""Input and output contracts for the soundtrack and metadata-summary flows.

Every model accepts both its Python field names and the camelCase names used
on the wire and in the model's JSON replies.
"""

from __future__ import annotations

from collections.abc import Mapping
from typing import Any, TypeVar

from pydantic import (
    BaseModel,
    ConfigDict,
    Field,
    ValidationError,
    ValidationInfo,
    field_validator,
)
from pydantic_core import PydanticCustomError

from sonic_errors import InputValidationError

GENRES = (
    "Cinematic",
    "Lo-fi Hip Hop",
    "Ambient",
    "Electronic",
    "Jazz",
    "Horror",
    "Fantasy",
    "Pop",
    "Indie Folk",
    "Synthwave",
)

MOODS = (
    "Relaxing",
    "Epic",
    "Intense",
    "Happy",
    "Upbeat",
    "Dark",
    "Mysterious",
    "Calm",
    "Energetic",
)

MIN_LENGTH_MINUTES = 1
MAX_LENGTH_MINUTES = 3

ModelT = TypeVar("ModelT", bound=BaseModel)


def _require_text(value: str, message: str) -> str:
    if not value:
        raise PydanticCustomError("empty_text", message)
    return value


class _Contract(BaseModel):
    model_config = ConfigDict(populate_by_name=True, str_strip_whitespace=True, frozen=True)


class SoundtrackRequest(_Contract):
    genre: str = Field(description="The genre of the soundtrack.")
    mood: str = Field(description="The mood of the soundtrack.")
    length_minutes: int = Field(
        MIN_LENGTH_MINUTES,
        ge=MIN_LENGTH_MINUTES,
        le=MAX_LENGTH_MINUTES,
        strict=True,
        alias="lengthMinutes",
        description="The length of the soundtrack in minutes.",
    )

    @field_validator("genre", "mood")
    @classmethod
    def _not_empty(cls, value: str, info: ValidationInfo) -> str:
        return _require_text(value, f"{info.field_name} must not be empty.")


class SoundtrackResult(_Contract):
    description: str = Field(
        min_length=1,
        description=(
            "A description of the generated soundtrack, including BPM, key, "
            "instruments used, and mood tags."
        ),
    )
    audio_data_uri: str | None = Field(
        None,
        alias="audioDataUri",
        description="The generated soundtrack as a data URI in base64 format.",
    )

    @field_validator("audio_data_uri")
    @classmethod
    def _blank_audio_is_absent(cls, value: str | None) -> str | None:
        return value or None


class MetadataSummaryRequest(_Contract):
    bpm: float = Field(strict=True, description="The tempo of the track in beats per minute.")
    key: str = Field(description="The musical key of the track (e.g., C major, A minor).")
    instruments: str = Field(
        description="A comma-separated list of instruments used in the track."
    )
    mood: str = Field(description="A description of the overall mood or feeling of the track.")

    @field_validator("key", "instruments", "mood")
    @classmethod
    def _not_empty(cls, value: str, info: ValidationInfo) -> str:
        return _require_text(value, f"{info.field_name} must not be empty.")


class MetadataSummaryResult(_Contract):
    summary: str = Field(
        min_length=1, description="A concise summary of the soundtrack metadata."
    )


class ComposerFormValues(_Contract):
    """What the composer form collects; a superset of SoundtrackRequest."""

    genre: str = Field("", validate_default=True)
    mood: str = Field("", validate_default=True)
    length_minutes: int = Field(
        MIN_LENGTH_MINUTES, ge=MIN_LENGTH_MINUTES, le=MAX_LENGTH_MINUTES, alias="lengthMinutes"
    )
    loop: bool = False
    # Collected for future use; never sent to the model.
    mood_intensity: int = Field(50, ge=0, le=100, alias="moodIntensity")

    @field_validator("genre")
    @classmethod
    def _genre_selected(cls, value: str) -> str:
        return _require_text(value, "Please select a genre.")

    @field_validator("mood")
    @classmethod
    def _mood_selected(cls, value: str) -> str:
        return _require_text(value, "Please select a mood.")

    def to_request(self) -> SoundtrackRequest:
        return SoundtrackRequest(
            genre=self.genre, mood=self.mood, length_minutes=self.length_minutes
        )


def field_errors(exc: ValidationError) -> dict[str, str]:
    """Collapse a pydantic error list to the first message per field."""
    errors: dict[str, str] = {}
    for error in exc.errors():
        name = ".".join(str(part) for part in error["loc"]) or "__root__"
        errors.setdefault(name, error["msg"])
    return errors


def validate(schema: type[ModelT], payload: Mapping[str, Any] | ModelT) -> ModelT:
    """Validate ``payload`` against ``schema`` or raise InputValidationError."""
    if isinstance(payload, schema):
        return payload
    try:
        return schema.model_validate(payload)
    except ValidationError as exc:
        raise InputValidationError(field_errors(exc)) from exc


def to_payload(model: BaseModel) -> dict[str, Any]:
    return model.model_dump(by_alias=True, exclude_none=True)
