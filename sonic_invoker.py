from __future__ import annotations

import json
import logging
import os
from typing import Any, TypeVar

from openai import OpenAI, OpenAIError
from pydantic import BaseModel, ValidationError

from sonic_errors import ContractViolationError, InvocationError

_LOGGER = logging.getLogger("sonic_alchemist.invoker")
_DEFAULT_MODEL = "gpt-4o-mini"

ModelT = TypeVar("ModelT", bound=BaseModel)

SYSTEM_PROMPT = (
    "You are a professional music supervisor. Reply with a single JSON object and "
    "nothing else. The object must conform to this JSON Schema:\n{schema}"
)


def _extract_json_payload(content: str) -> str | None:
    start = content.find("{")
    end = content.rfind("}")
    if start == -1 or end == -1 or end <= start:
        return None
    return content[start : end + 1]


def _content_snippet(content: str, limit: int = 200) -> str:
    cleaned = content.strip()
    if len(cleaned) <= limit:
        return cleaned
    return f"{cleaned[:limit]}..."


class ModelInvoker:
    """Sends one rendered prompt to an OpenAI-compatible chat endpoint.

    Each call is a fresh request: no retry, no caching and no timeout beyond
    whatever the client itself applies. The reply must be a JSON object that
    validates against the requested output schema.
    """

    def __init__(
        self,
        client: Any,
        model: str = _DEFAULT_MODEL,
        *,
        temperature: float | None = None,
        seed: int | None = None,
    ) -> None:
        self._client = client
        self._model = model
        self._temperature = temperature
        self._seed = seed

    @classmethod
    def from_env(
        cls,
        model: str = _DEFAULT_MODEL,
        *,
        temperature: float | None = None,
        seed: int | None = None,
    ) -> ModelInvoker:
        try:
            client = OpenAI(api_key=os.getenv("OPENAI_API_KEY"))
        except OpenAIError as exc:
            raise InvocationError(f"Model provider is not configured: {exc}") from exc
        return cls(client, model, temperature=temperature, seed=seed)

    @property
    def model(self) -> str:
        return self._model

    def build_request(self, prompt: str, output_schema: type[BaseModel]) -> dict[str, Any]:
        schema = json.dumps(output_schema.model_json_schema(by_alias=True), separators=(",", ":"))
        request: dict[str, Any] = {
            "model": self._model,
            "messages": [
                {"role": "system", "content": SYSTEM_PROMPT.format(schema=schema)},
                {"role": "user", "content": prompt},
            ],
            "response_format": {"type": "json_object"},
            "temperature": self._temperature,
            "seed": self._seed,
        }
        return {key: value for key, value in request.items() if value is not None}

    def invoke(self, prompt: str, output_schema: type[ModelT]) -> ModelT:
        request = self.build_request(prompt, output_schema)
        _LOGGER.debug("Prompt for %s:\n%s", output_schema.__name__, prompt)

        try:
            response = self._client.chat.completions.create(**request)
        except Exception as exc:  # any client or transport failure
            _LOGGER.warning("Model provider request failed: %s", exc, exc_info=True)
            raise InvocationError(str(exc) or type(exc).__name__) from exc

        choices = getattr(response, "choices", None)
        if not choices:
            raise ContractViolationError("Model provider response has no choices")
        content = choices[0].message.content
        if not isinstance(content, str) or not content.strip():
            raise ContractViolationError("Model provider returned empty content")
        return self._parse(content.strip(), output_schema)

    def _parse(self, content: str, output_schema: type[ModelT]) -> ModelT:
        try:
            return output_schema.model_validate_json(content)
        except ValidationError as exc:
            extracted = _extract_json_payload(content)
            if extracted and extracted != content:
                try:
                    return output_schema.model_validate_json(extracted)
                except ValidationError:
                    _LOGGER.warning("Model reply invalid after JSON extraction.", exc_info=True)
            snippet = _content_snippet(content) or "<empty>"
            _LOGGER.warning("Model reply does not match %s: %s", output_schema.__name__, snippet)
            raise ContractViolationError(
                f"Model reply does not match {output_schema.__name__}: {snippet}"
            ) from exc
