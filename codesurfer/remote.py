# codesurfer/remote.py
"""
Client for the Piston remote code-execution API.

Builds the execute payload for one program, posts it, and folds the run/compile
stages of the response into a single console string. Failures of any kind come
back as error text; nothing raises past run_remote().
"""

import logging
from typing import Dict, Optional

import requests

from codesurfer import config
from codesurfer.errors import (
    CompilationError,
    ExecutionError,
    ExecutionTimeout,
    ProgramRuntimeError,
    TransportError,
)
from codesurfer.languages import LanguageDescriptor, resolve
from codesurfer.preprocess import preprocess
from codesurfer.results import ExecutionResult

logger = logging.getLogger(__name__)

# Fixed Piston limits (milliseconds / bytes, -1 = service default)
COMPILE_TIMEOUT_MS = 10000
RUN_TIMEOUT_MS = 3000
COMPILE_MEMORY_LIMIT = -1
RUN_MEMORY_LIMIT = -1


def build_payload(descriptor: LanguageDescriptor, source_code: str, stdin: str = "") -> Dict:
    return {
        "language": descriptor.remote_service_id,
        "version": descriptor.remote_service_version,
        "files": [{"name": descriptor.scratch_filename, "content": source_code}],
        "stdin": stdin or "",
        "args": [],
        "compile_timeout": COMPILE_TIMEOUT_MS,
        "run_timeout": RUN_TIMEOUT_MS,
        "compile_memory_limit": COMPILE_MEMORY_LIMIT,
        "run_memory_limit": RUN_MEMORY_LIMIT,
    }


def parse_response(body: Dict) -> ExecutionResult:
    """
    Map a Piston response body to a result.

    Runtime stderr wins over everything else, then a killed (timed out) run,
    then compile stderr, then stdout.
    Piston omits `run` when compilation fails, so either stage may be missing,
    but not both.
    """
    if not isinstance(body, dict):
        raise TransportError("malformed response from execution service")
    run: Optional[Dict] = body.get("run")
    compile_stage: Optional[Dict] = body.get("compile")
    if not isinstance(run, dict) and not isinstance(compile_stage, dict):
        message = body.get("message")
        if message:
            raise TransportError(str(message))
        raise TransportError("malformed response from execution service")

    run = run if isinstance(run, dict) else {}
    compile_stage = compile_stage if isinstance(compile_stage, dict) else {}

    if run.get("stderr"):
        raise ProgramRuntimeError(run["stderr"])
    # Piston kills runs that exceed run_timeout with SIGKILL and no stderr
    if run.get("signal") == "SIGKILL":
        raise ExecutionTimeout(RUN_TIMEOUT_MS // 1000)
    if compile_stage.get("stderr"):
        raise CompilationError(compile_stage["stderr"])
    return ExecutionResult.from_stdout(run.get("stdout") or "")


def _post(payload: Dict) -> Dict:
    try:
        resp = requests.post(config.PISTON_URL, json=payload, timeout=config.PISTON_REQUEST_TIMEOUT)
    except requests.RequestException as e:
        raise TransportError(str(e)) from e

    if resp.status_code >= 400:
        # Piston explains rejected requests (unknown runtime, bad payload) in `message`
        try:
            body = resp.json()
        except ValueError:
            body = None
        detail = (body.get("message") if isinstance(body, dict) else None) or resp.text
        raise TransportError(f"HTTP {resp.status_code}: {detail}".strip())

    try:
        return resp.json()
    except ValueError as e:
        raise TransportError("malformed response from execution service") from e


def run_remote(source_code: str, language_id: str, stdin: str = "") -> ExecutionResult:
    """
    Execute one program on the remote service and return the console result.
    """
    try:
        descriptor = resolve(language_id)
        payload = build_payload(descriptor, preprocess(source_code, descriptor.id), stdin)
        logger.debug("Posting %s program to %s", descriptor.id, config.PISTON_URL)
        return parse_response(_post(payload))
    except ExecutionError as e:
        if isinstance(e, TransportError):
            logger.debug("Remote execution failed: %s", e.detail)
        return e.to_result()
