# HTML template for the SonicAlchemist composer page.
# Rendered with Flask's render_template_string; expects genres, moods, form,
# errors, state and year in the context.

HTML = r"""
<!doctype html>
<html lang="en">
<head>
  <meta charset="utf-8">
  <meta name="viewport" content="width=device-width, initial-scale=1">
  <title>SonicAlchemist</title>
  <style>
    body { font-family: system-ui, sans-serif; margin: 0; background: #111318; color: #e8e8ef; }
    header, footer { padding: 16px 24px; border-bottom: 1px solid #2a2d36; }
    footer { border-top: 1px solid #2a2d36; border-bottom: none; text-align: center; font-size: 13px; color: #8a8fa0; }
    main { display: grid; grid-template-columns: 1fr 1fr; gap: 32px; padding: 32px 24px; }
    .card { background: #1a1d24; border-radius: 10px; padding: 20px; }
    .field { margin-bottom: 18px; }
    .field label { display: block; font-weight: 600; margin-bottom: 6px; }
    .tagline { color: #8a8fa0; max-width: 640px; }
    output { float: right; font-weight: 400; color: #8a8fa0; }
    .hint { font-size: 12px; color: #8a8fa0; }
    .field-error { color: #ff6b6b; font-size: 13px; }
    .panel { border: 2px dashed #3a3f4d; border-radius: 10px; padding: 32px; text-align: center; }
    .panel.error { border-color: #a33; color: #ff6b6b; }
    .toast { padding: 10px 14px; border-radius: 8px; margin: 8px 24px; background: #23413a; }
    .toast.destructive { background: #4a1f1f; }
    .description { white-space: pre-wrap; background: #22252e; padding: 12px; border-radius: 6px; }
    button { padding: 10px 16px; border-radius: 6px; border: none; cursor: pointer; }
    button[disabled] { opacity: 0.5; cursor: not-allowed; }
    #loadingPanel { display: none; }
  </style>
</head>
<body>
  <header>
    <h1>SonicAlchemist</h1>
    <p class="tagline">Welcome to SonicAlchemist, your AI-powered soundtrack generator. Choose a genre,
      set the mood, and let us create a custom soundtrack for your project in seconds.</p>
  </header>

  {% for category, message in get_flashed_messages(with_categories=true) %}
  <div class="toast {{ category }}" role="status">{{ message }}</div>
  {% endfor %}

  <main>
    <section class="card">
      <h2>Create Your Soundtrack</h2>
      <p class="hint">Select your preferences and let the AI compose a unique track.</p>
      <form method="post" action="{{ url_for('composer') }}" id="composerForm">
        <div class="field">
          <label for="genre">Genre</label>
          <select id="genre" name="genre">
            {% for genre in genres %}
            <option value="{{ genre }}" {% if genre == form.genre %}selected{% endif %}>{{ genre }}</option>
            {% endfor %}
          </select>
          {% if errors.genre %}<div class="field-error">{{ errors.genre }}</div>{% endif %}
        </div>

        <div class="field">
          <label for="mood">Mood</label>
          <select id="mood" name="mood">
            {% for mood in moods %}
            <option value="{{ mood }}" {% if mood == form.mood %}selected{% endif %}>{{ mood }}</option>
            {% endfor %}
          </select>
          {% if errors.mood %}<div class="field-error">{{ errors.mood }}</div>{% endif %}
        </div>

        <div class="field">
          <label for="lengthMinutes">Track Length
            <output for="lengthMinutes" id="lengthMinutesValue">{{ form.lengthMinutes }} minute{% if form.lengthMinutes|string != "1" %}s{% endif %}</output>
          </label>
          <input type="range" id="lengthMinutes" name="lengthMinutes" min="1" max="3" step="1"
                 value="{{ form.lengthMinutes }}">
          <div class="hint">Adjustable from 1 to 3 minutes.</div>
          {% if errors.lengthMinutes %}<div class="field-error">{{ errors.lengthMinutes }}</div>{% endif %}
        </div>

        <div class="field">
          <label><input type="checkbox" name="loop" {% if form.loop %}checked{% endif %}> Loop Track</label>
          <div class="hint">Enable to loop the soundtrack during preview.</div>
        </div>

        <div class="field">
          <label for="moodIntensity">Mood Intensity
            <output for="moodIntensity" id="moodIntensityValue">{{ form.moodIntensity }}%</output>
          </label>
          <input type="range" id="moodIntensity" name="moodIntensity" min="0" max="100" step="1"
                 value="{{ form.moodIntensity }}">
          <div class="hint">Adjust the intensity of the mood. (Note: This setting is for future use
            and does not currently affect AI generation.)</div>
          {% if errors.moodIntensity %}<div class="field-error">{{ errors.moodIntensity }}</div>{% endif %}
        </div>

        <button type="submit" id="submitButton" {% if state.is_loading %}disabled{% endif %}>Generate Soundtrack</button>
      </form>
    </section>

    <section>
      <div class="panel" id="loadingPanel">
        <p><strong>Crafting your masterpiece...</strong></p>
        <p class="hint">Please wait a moment.</p>
      </div>

      <div id="statePanel">
      {% if state.display == "failed" %}
        <div class="panel error">
          <p><strong>Oops! Something went wrong.</strong></p>
          <p>{{ state.error }}</p>
        </div>
      {% elif state.display == "success" %}
        <div class="card">
          <h3>Generated Soundtrack</h3>
          <label for="description" class="hint">Track Description &amp; Metadata</label>
          <p id="description" class="description">{{ state.result.description }}</p>
          {% if state.result.audio_data_uri %}
          <label for="audio-player" class="hint">Audio Preview</label>
          <audio id="audio-player" controls src="{{ state.result.audio_data_uri }}"{% if state.loop_enabled %} loop{% endif %}>
            Your browser does not support the audio element.
          </audio>
          {% else %}
          <div class="panel" id="no-preview">
            <p>Audio preview not available for this generation.</p>
            <p class="hint">(The AI might sometimes only provide metadata)</p>
          </div>
          {% endif %}
          <div>
            <button type="button" {% if not state.result.audio_data_uri %}disabled{% endif %}
                    onclick="alert('MP3 export functionality not implemented yet.')">Export MP3</button>
            <button type="button" {% if not state.result.audio_data_uri %}disabled{% endif %}
                    onclick="alert('WAV export functionality not implemented yet.')">Export WAV</button>
          </div>
        </div>
      {% else %}
        <div class="panel">
          <p><strong>Ready to Compose?</strong></p>
          <p class="hint">Your generated soundtrack will appear here.</p>
        </div>
      {% endif %}
      </div>
    </section>
  </main>

  <footer>&copy; {{ year }} SonicAlchemist. Powered by AI.</footer>

  <script>
    document.getElementById("lengthMinutes").addEventListener("input", function () {
      var minutes = this.value;
      document.getElementById("lengthMinutesValue").textContent =
        minutes + " minute" + (minutes === "1" ? "" : "s");
    });
    document.getElementById("moodIntensity").addEventListener("input", function () {
      document.getElementById("moodIntensityValue").textContent = this.value + "%";
    });
    document.getElementById("composerForm").addEventListener("submit", function (event) {
      var button = document.getElementById("submitButton");
      if (button.disabled) { event.preventDefault(); return; }
      button.disabled = true;
      button.textContent = "Generating...";
      document.getElementById("statePanel").style.display = "none";
      document.getElementById("loadingPanel").style.display = "block";
    });
  </script>
</body>
</html>
"""
