# codesurfer/main.py
"""
Flask entrypoint for the CodeSurfer execution API.
"""

import logging

from flask import Flask, jsonify, request

from codesurfer import config
from codesurfer.controller import execute_code
from codesurfer.languages import LANGUAGES, supported_languages
from codesurfer.templates import get_default_code
from codesurfer.validation import validate_request

app = Flask(__name__)

# Basic logging config
logging.basicConfig(level=config.LOG_LEVEL)
logger = logging.getLogger(__name__)


@app.route("/health", methods=["GET"])
def health():
    return jsonify({"ok": True})


@app.route("/api/languages", methods=["GET"])
def languages():
    return jsonify(
        [{"id": lang.id, "name": lang.display_name, "extension": lang.file_extension} for lang in supported_languages()]
    )


@app.route("/api/templates/<language>", methods=["GET"])
def template(language):
    language = language.strip().lower()
    if language not in LANGUAGES:
        return jsonify({"error": f"Language '{language}' is not supported."}), 404
    return jsonify({"language": language, "code": get_default_code(language)})


@app.route("/api/execute", methods=["POST"])
def execute():
    # Ensure valid JSON payload
    try:
        data = request.get_json(force=True)
    except Exception:
        return jsonify({"error": "Invalid JSON payload."}), 400

    ok, err = validate_request(data)
    if not ok:
        return jsonify({"error": err}), 400

    language = data["language"]
    try:
        result = execute_code(data["code"], language, data.get("input") or "")
    except Exception:
        logger.exception("Error executing code")
        return jsonify({"error": "Failed to execute code"}), 500

    if result.is_error:
        # Log error for auditing
        logger.warning("Execution error (%s) for %s code", result.error_kind, language)

    return jsonify(result.to_payload(language)), 200


if __name__ == "__main__":
    # For local development:
    # Run with: python -m codesurfer.main  (run from the repository root)
    app.run(host=config.HOST, port=config.PORT)
