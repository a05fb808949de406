from __future__ import annotations

import logging
from collections.abc import Callable, Mapping
from dataclasses import dataclass
from typing import Any, Generic, TypeVar

from pydantic import BaseModel

from sonic_invoker import ModelInvoker
from sonic_prompts import render_metadata_summary_prompt, render_soundtrack_prompt
from sonic_schemas import (
    MetadataSummaryRequest,
    MetadataSummaryResult,
    SoundtrackRequest,
    SoundtrackResult,
    validate,
)

_LOGGER = logging.getLogger("sonic_alchemist.flows")

InT = TypeVar("InT", bound=BaseModel)
OutT = TypeVar("OutT", bound=BaseModel)


@dataclass(frozen=True)
class Flow(Generic[InT, OutT]):
    """Validate input, render the prompt, invoke the model, validate output."""

    name: str
    input_schema: type[InT]
    output_schema: type[OutT]
    render: Callable[[InT], str]

    def __call__(self, invoker: ModelInvoker, payload: Mapping[str, Any] | InT) -> OutT:
        request = validate(self.input_schema, payload)
        prompt = self.render(request)
        _LOGGER.info("Running %s", self.name)
        return invoker.invoke(prompt, self.output_schema)


generate_soundtrack_flow: Flow[SoundtrackRequest, SoundtrackResult] = Flow(
    name="generateSoundtrackFlow",
    input_schema=SoundtrackRequest,
    output_schema=SoundtrackResult,
    render=render_soundtrack_prompt,
)

summarize_metadata_flow: Flow[MetadataSummaryRequest, MetadataSummaryResult] = Flow(
    name="summarizeMetadataFlow",
    input_schema=MetadataSummaryRequest,
    output_schema=MetadataSummaryResult,
    render=render_metadata_summary_prompt,
)


def generate_soundtrack(
    invoker: ModelInvoker, payload: Mapping[str, Any] | SoundtrackRequest
) -> SoundtrackResult:
    return generate_soundtrack_flow(invoker, payload)


def summarize_metadata(
    invoker: ModelInvoker, payload: Mapping[str, Any] | MetadataSummaryRequest
) -> MetadataSummaryResult:
    return summarize_metadata_flow(invoker, payload)
