# app.py  – SonicAlchemist backend (composer page + soundtrack/metadata flows)

from __future__ import annotations
import logging
import os
from datetime import date
from typing import Any
from flask import Flask, render_template_string, request
from flask_cors import CORS

from sonic_composer import FlashNotifier, FormController, FormState, validate_form
from sonic_errors import InputValidationError, InvocationError
from sonic_flows import generate_soundtrack, summarize_metadata
from sonic_invoker import ModelInvoker
from sonic_page import HTML
from sonic_schemas import GENRES, MOODS, to_payload

# ── config via env ────────────────────────────────────────────────────────
MODEL            = os.getenv("OPENAI_MODEL", "gpt-4o-mini")
TEMPERATURE_SAFE = float(os.getenv("TEMPERATURE", "0.4"))
TEMPERATURE_FREE = 0.7                     # when CREATIVE_MODE == "1"
CREATIVE_MODE    = os.getenv("CREATIVE_MODE") == "1"
SEED             = int(os.getenv("SEED")) if os.getenv("SEED") else None
SECRET_KEY       = os.getenv("FLASK_SECRET_KEY", "sonic-alchemist-dev")
LOG_LEVEL        = os.getenv("LOG_LEVEL", "INFO").upper()
PORT             = int(os.getenv("PORT", "5000"))

DEFAULT_FORM: dict[str, Any] = {
    "genre": "Cinematic",
    "mood": "Epic",
    "lengthMinutes": 1,
    "loop": False,
    "moodIntensity": 50,
}

_LOGGER = logging.getLogger("sonic_alchemist.app")


def configure_logging() -> None:
    logging.basicConfig(
        level=LOG_LEVEL,
        format="[%(asctime)s] %(levelname)s: %(message)s",
        datefmt="%Y-%m-%d %H:%M:%S",
    )


def default_invoker() -> ModelInvoker:
    temperature = TEMPERATURE_FREE if CREATIVE_MODE else TEMPERATURE_SAFE
    return ModelInvoker.from_env(MODEL, temperature=temperature, seed=SEED)


# ── Flask app ─────────────────────────────────────────────────────────────
def create_app(invoker: ModelInvoker | None = None) -> Flask:
    app = Flask(__name__)
    app.secret_key = SECRET_KEY
    CORS(app)

    # built on first use so the app imports without an API key
    app.extensions["sonic_invoker"] = invoker

    def get_invoker() -> ModelInvoker:
        current = app.extensions.get("sonic_invoker")
        if current is None:
            current = default_invoker()
            app.extensions["sonic_invoker"] = current
        return current

    def render_page(form: dict[str, Any], errors: dict[str, str], state: FormState) -> str:
        return render_template_string(
            HTML,
            genres=GENRES,
            moods=MOODS,
            form=form,
            errors=errors,
            state=state,
            year=date.today().year,
        )

    @app.get("/health")
    def health() -> tuple[str, int]:
        return "SonicAlchemist API live", 200

    @app.route("/", methods=["GET", "POST"])
    def composer() -> tuple[str, int]:
        if request.method == "GET":
            return render_page(dict(DEFAULT_FORM), {}, FormState.idle()), 200

        form = {**DEFAULT_FORM, **request.form.to_dict(), "loop": "loop" in request.form}
        try:
            values = validate_form(request.form)
        except InputValidationError as exc:
            _LOGGER.info("Composer form rejected: %s", exc.field_errors)
            return render_page(form, exc.field_errors, FormState.idle()), 400

        controller = FormController(
            lambda soundtrack: generate_soundtrack(get_invoker(), soundtrack),
            FlashNotifier(),
        )
        state = controller.submit(values)
        return render_page(form, {}, state), 200

    @app.post("/api/soundtrack")
    def soundtrack_api() -> tuple[dict[str, Any], int]:
        data = request.get_json(force=True, silent=True) or {}
        try:
            result = generate_soundtrack(get_invoker(), data)
        except InputValidationError as exc:
            return {"error": str(exc), "fields": exc.field_errors}, 400
        except InvocationError as exc:
            return {"error": str(exc)}, 500
        return to_payload(result), 200

    @app.post("/api/metadata-summary")
    def metadata_summary_api() -> tuple[dict[str, Any], int]:
        data = request.get_json(force=True, silent=True) or {}
        try:
            result = summarize_metadata(get_invoker(), data)
        except InputValidationError as exc:
            return {"error": str(exc), "fields": exc.field_errors}, 400
        except InvocationError as exc:
            return {"error": str(exc)}, 500
        return to_payload(result), 200

    return app


configure_logging()
app = create_app()

if __name__ == "__main__":
    app.run(host="0.0.0.0", port=PORT)
