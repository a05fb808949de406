from __future__ import annotations

from openai import OpenAIError

from sonic_schemas import GENRES, MOODS

FORM = {
    "genre": "Cinematic",
    "mood": "Epic",
    "lengthMinutes": "2",
    "moodIntensity": "50",
}


def test_health(client) -> None:
    response = client.get("/health")

    assert response.status_code == 200
    assert response.get_data(as_text=True) == "SonicAlchemist API live"


def test_index_renders_idle_form(client) -> None:
    response = client.get("/")
    html = response.get_data(as_text=True)

    assert response.status_code == 200
    assert "Ready to Compose?" in html
    for label in GENRES + MOODS:
        assert f'value="{label}"' in html
    assert "does not currently affect AI generation" in html


def test_submit_with_loop_renders_looping_player(client, completions) -> None:
    completions.reply_with({"description": "Soaring brass", "audioDataUri": "data:audio/wav;base64,AAAA"})

    response = client.post("/", data={**FORM, "loop": "on"})
    html = response.get_data(as_text=True)

    assert response.status_code == 200
    assert "Soaring brass" in html
    assert 'id="audio-player"' in html
    assert 'src="data:audio/wav;base64,AAAA" loop>' in html
    assert "Soundtrack Generated!" in html


def test_submit_without_loop_renders_plain_player(client, completions) -> None:
    completions.reply_with({"description": "Soaring brass", "audioDataUri": "data:audio/wav;base64,AAAA"})

    html = client.post("/", data=FORM).get_data(as_text=True)

    assert 'src="data:audio/wav;base64,AAAA">' in html


def test_submit_description_only_shows_no_preview(client, completions) -> None:
    completions.reply_with({"description": "Only words this time"})

    response = client.post("/", data=FORM)
    html = response.get_data(as_text=True)

    assert response.status_code == 200
    assert "Only words this time" in html
    assert "Audio preview not available for this generation." in html
    assert 'id="audio-player"' not in html
    assert "Oops! Something went wrong." not in html


def test_submit_provider_failure_shows_error_panel(client, completions) -> None:
    completions.reply_with(OpenAIError("quota exceeded"))

    response = client.post("/", data=FORM)
    html = response.get_data(as_text=True)

    assert response.status_code == 200
    assert "Oops! Something went wrong." in html
    assert "Failed to generate soundtrack: quota exceeded" in html
    assert "Generation Failed: quota exceeded" in html
    assert 'id="description"' not in html


def test_submit_missing_description_is_an_error(client, completions) -> None:
    completions.reply_with({"audioDataUri": "data:audio/wav;base64,AAAA"})

    html = client.post("/", data=FORM).get_data(as_text=True)

    assert "Oops! Something went wrong." in html
    assert 'id="audio-player"' not in html


def test_submit_out_of_range_length_is_rejected_inline(client, completions) -> None:
    response = client.post("/", data={**FORM, "lengthMinutes": "5"})
    html = response.get_data(as_text=True)

    assert response.status_code == 400
    assert html.count('<div class="field-error">') == 1
    assert html.index('class="field-error"') > html.index('id="lengthMinutes"')
    assert html.index('class="field-error"') < html.index('id="moodIntensity"')
    assert completions.calls == []


def test_submit_empty_genre_is_rejected_inline(client, completions) -> None:
    response = client.post("/", data={**FORM, "genre": ""})

    assert response.status_code == 400
    assert "Please select a genre." in response.get_data(as_text=True)
    assert completions.calls == []


def test_soundtrack_api(client, completions) -> None:
    completions.reply_with({"description": "Chill keys"})

    response = client.post("/api/soundtrack", json={"genre": "Jazz", "mood": "Relaxing"})

    assert response.status_code == 200
    assert response.get_json() == {"description": "Chill keys"}
    assert "Length: 1 minutes" in completions.last_prompt


def test_soundtrack_api_validation_error(client, completions) -> None:
    response = client.post("/api/soundtrack", json={"genre": "", "mood": "Relaxing"})

    assert response.status_code == 400
    assert response.get_json()["fields"] == {"genre": "genre must not be empty."}
    assert completions.calls == []


def test_soundtrack_api_contract_violation(client, completions) -> None:
    completions.reply_with({"description": ""})

    response = client.post("/api/soundtrack", json={"genre": "Jazz", "mood": "Relaxing"})

    assert response.status_code == 500
    assert "SoundtrackResult" in response.get_json()["error"]


def test_metadata_summary_api(client, completions) -> None:
    completions.reply_with({"summary": "A calm 70 BPM piece in E minor."})

    response = client.post(
        "/api/metadata-summary",
        json={"bpm": 70, "key": "E minor", "instruments": "piano, cello", "mood": "Calm"},
    )

    assert response.status_code == 200
    assert response.get_json() == {"summary": "A calm 70 BPM piece in E minor."}
    assert "BPM: 70" in completions.last_prompt


def test_metadata_summary_api_provider_error(client, completions) -> None:
    completions.reply_with(OpenAIError("timeout"))

    response = client.post(
        "/api/metadata-summary",
        json={"bpm": 70, "key": "E minor", "instruments": "piano", "mood": "Calm"},
    )

    assert response.status_code == 500
    assert response.get_json() == {"error": "timeout"}


def test_soundtrack_api_non_openai_client_failure_is_json(client, completions) -> None:
    completions.reply_with(RuntimeError("socket closed"))

    response = client.post("/api/soundtrack", json={"genre": "Jazz", "mood": "Calm"})

    assert response.status_code == 500
    assert response.get_json() == {"error": "socket closed"}


def test_metadata_summary_api_non_openai_client_failure_is_json(client, completions) -> None:
    completions.reply_with(ConnectionResetError("peer reset"))

    response = client.post(
        "/api/metadata-summary",
        json={"bpm": 90, "key": "G major", "instruments": "guitar", "mood": "Happy"},
    )

    assert response.status_code == 500
    assert response.get_json() == {"error": "peer reset"}


def test_soundtrack_api_rejects_boolean_length(client, completions) -> None:
    response = client.post(
        "/api/soundtrack", json={"genre": "Jazz", "mood": "Calm", "lengthMinutes": True}
    )

    assert response.status_code == 400
    assert "lengthMinutes" in response.get_json()["fields"]
    assert completions.calls == []


def test_index_shows_slider_values_and_tagline(client) -> None:
    html = client.get("/").get_data(as_text=True)

    assert "your AI-powered soundtrack generator" in html
    assert '<output for="lengthMinutes" id="lengthMinutesValue">1 minute</output>' in html
    assert '<output for="moodIntensity" id="moodIntensityValue">50%</output>' in html


def test_rejected_form_echoes_plural_length(client) -> None:
    html = client.post("/", data={**FORM, "genre": ""}).get_data(as_text=True)

    assert '<output for="lengthMinutes" id="lengthMinutesValue">2 minutes</output>' in html
