# codesurfer/validation.py
"""
Request-body validation for the execute endpoint.
"""

from typing import Any, Optional, Tuple

from codesurfer import config

MISSING_FIELDS = "Code and language are required"


def validate_request(data: Any) -> Tuple[bool, Optional[str]]:
    """
    Validate the JSON body of POST /api/execute.

    Returns (True, None) if valid, otherwise (False, "<error message>").
    """
    if not isinstance(data, dict):
        return False, "Request body must be a JSON object."

    code = data.get("code")
    language = data.get("language")
    if not code or not language:
        return False, MISSING_FIELDS
    if not isinstance(code, str):
        return False, "'code' must be a string."
    if not isinstance(language, str):
        return False, "'language' must be a string."

    stdin = data.get("input")
    if stdin is not None and not isinstance(stdin, str):
        return False, "'input' must be a string."

    if len(code.encode("utf-8")) > config.MAX_CODE_SIZE:
        return False, f"Code too large (>{config.MAX_CODE_SIZE} bytes)."

    return True, None
