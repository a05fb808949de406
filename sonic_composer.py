"""Composer form state machine.

Idle -> Loading -> Success | Failed, and back to Loading on the next submit.
Each transition replaces the whole FormState, so a reader never sees a result
next to an error or a loading flag next to either.
"""

from __future__ import annotations

import logging
import threading
from collections.abc import Callable, Mapping
from dataclasses import dataclass
from typing import Any, Literal, Protocol

from flask import flash

from sonic_errors import SubmissionInProgressError
from sonic_schemas import ComposerFormValues, SoundtrackRequest, SoundtrackResult, validate

_LOGGER = logging.getLogger("sonic_alchemist.composer")

Severity = Literal["default", "destructive"]
DisplayState = Literal["idle", "loading", "success", "failed"]

_UNCHECKED = {"", "0", "off", "false", "no"}


class Notifier(Protocol):
    def enqueue(self, message: str, severity: Severity = "default") -> None: ...


class FlashNotifier:
    """Toasts through Flask's flashed-message channel; needs a request context."""

    def enqueue(self, message: str, severity: Severity = "default") -> None:
        flash(message, severity)


class ListNotifier:
    def __init__(self) -> None:
        self.messages: list[tuple[str, Severity]] = []

    def enqueue(self, message: str, severity: Severity = "default") -> None:
        self.messages.append((message, severity))


@dataclass(frozen=True)
class FormState:
    is_loading: bool = False
    error: str | None = None
    result: SoundtrackResult | None = None
    loop_enabled: bool = False

    @classmethod
    def idle(cls) -> FormState:
        return cls()

    @classmethod
    def loading(cls, loop: bool) -> FormState:
        return cls(is_loading=True, loop_enabled=loop)

    @classmethod
    def success(cls, result: SoundtrackResult, loop: bool) -> FormState:
        return cls(result=result, loop_enabled=loop)

    @classmethod
    def failed(cls, message: str, loop: bool) -> FormState:
        return cls(error=message, loop_enabled=loop)

    @property
    def display(self) -> DisplayState:
        if self.is_loading:
            return "loading"
        if self.error is not None:
            return "failed"
        if self.result is not None:
            return "success"
        return "idle"


class FormController:
    def __init__(
        self,
        generate: Callable[[SoundtrackRequest], SoundtrackResult],
        notifier: Notifier,
        *,
        on_change: Callable[[FormState], None] | None = None,
    ) -> None:
        self._generate = generate
        self._notifier = notifier
        self._on_change = on_change
        self._lock = threading.Lock()
        self._state = FormState.idle()

    @property
    def state(self) -> FormState:
        return self._state

    def _transition(self, state: FormState) -> None:
        self._state = state
        if self._on_change is not None:
            self._on_change(state)

    def submit(self, values: ComposerFormValues) -> FormState:
        with self._lock:
            if self._state.is_loading:
                raise SubmissionInProgressError("A soundtrack is already being generated.")
            self._transition(FormState.loading(values.loop))

        request = values.to_request()
        _LOGGER.info(
            "Generating %s/%s soundtrack (%d min)",
            request.genre,
            request.mood,
            request.length_minutes,
        )
        try:
            result = self._generate(request)
        except Exception as exc:
            _LOGGER.error("Soundtrack generation failed: %s", exc, exc_info=True)
            message = str(exc) or "An unknown error occurred."
            state = FormState.failed(f"Failed to generate soundtrack: {message}", values.loop)
            with self._lock:
                self._transition(state)
            self._notifier.enqueue(f"Generation Failed: {message}", "destructive")
            return state

        state = FormState.success(result, values.loop)
        with self._lock:
            self._transition(state)
        self._notifier.enqueue(
            "Soundtrack Generated! Your custom track is ready for preview.", "default"
        )
        return state


def _checkbox(value: Any) -> bool:
    if isinstance(value, bool):
        return value
    if value is None:
        return False
    return str(value).strip().lower() not in _UNCHECKED


def validate_form(data: Mapping[str, Any]) -> ComposerFormValues:
    """Parse raw composer input (HTML form or JSON) into validated values."""
    values = {
        "genre": data.get("genre", ""),
        "mood": data.get("mood", ""),
        "lengthMinutes": data.get("lengthMinutes", 1),
        "loop": _checkbox(data.get("loop")),
        "moodIntensity": data.get("moodIntensity", 50),
    }
    return validate(ComposerFormValues, values)
