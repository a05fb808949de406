from __future__ import annotations

from sonic_schemas import MetadataSummaryRequest, SoundtrackRequest

SOUNDTRACK_TEMPLATE = """\
You are an AI sound design conceptualizer. Your task is to describe a concept for a \
1-3 minute royalty-free background soundtrack based on the user-selected genre and mood. \
Provide a detailed description of what this soundtrack would sound like and include \
specific metadata such as BPM, key, primary instruments, and mood tags. As a text-based \
AI, you cannot generate actual audio files. Your response should focus on providing a \
rich textual description and precise metadata.

Genre: {genre}
Mood: {mood}
Length: {length_minutes} minutes"""

METADATA_SUMMARY_TEMPLATE = """\
Summarize the following metadata of a generated soundtrack in a concise and informative way:

BPM: {bpm:g}
Key: {key}
Instruments: {instruments}
Mood: {mood}"""


def render_soundtrack_prompt(request: SoundtrackRequest) -> str:
    return SOUNDTRACK_TEMPLATE.format(
        genre=request.genre,
        mood=request.mood,
        length_minutes=request.length_minutes,
    )


def render_metadata_summary_prompt(request: MetadataSummaryRequest) -> str:
    return METADATA_SUMMARY_TEMPLATE.format(
        bpm=request.bpm,
        key=request.key,
        instruments=request.instruments,
        mood=request.mood,
    )
