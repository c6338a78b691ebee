# codesurfer/controller.py
"""
Controller / dispatcher for executing submitted programs.

JavaScript and TypeScript go to the console-capturing evaluator. Everything else
goes to the remote execution service (PISTON_URL) or, when none is configured,
to the host's local toolchains. With CODESURFER_LOCAL_FALLBACK set, a remote
call that fails at the transport layer is run once locally instead.
"""

import logging

from codesurfer import config
from codesurfer.errors import ExecutionError, InternalError, ToolchainMissing, TransportError
from codesurfer.languages import is_browser_native, resolve
from codesurfer.remote import run_remote
from codesurfer.results import ExecutionRequest, ExecutionResult
from sandbox.evaluator import evaluate
from sandbox.runner import run_local

logger = logging.getLogger(__name__)


def _dispatch(request: ExecutionRequest) -> ExecutionResult:
    descriptor = resolve(request.language_id)

    if is_browser_native(descriptor.id):
        logger.debug("Evaluating %s with the console harness", descriptor.id)
        result = evaluate(request.source_code, descriptor.id, request.stdin)
        if result.error_kind == ToolchainMissing.kind:
            # no node on the server; let the browser evaluate it
            result.use_client_fallback = True
        return result

    if config.PISTON_URL:
        logger.debug("Sending %s program to the remote service", descriptor.id)
        result = run_remote(request.source_code, descriptor.id, request.stdin)
        if result.error_kind == TransportError.kind and config.LOCAL_FALLBACK:
            # Remote service unavailable: run locally and mark the result
            logger.warning("Remote service unavailable, running %s locally", descriptor.id)
            result = run_local(request.source_code, descriptor.id, request.stdin)
            result.used_fallback = True
        return result

    logger.debug("Running %s program on local toolchains", descriptor.id)
    return run_local(request.source_code, descriptor.id, request.stdin)


def execute_code(code: str, language: str, stdin: str = "") -> ExecutionResult:
    """
    Run one program through exactly one execution path and return the console result.
    """
    request = ExecutionRequest(source_code=code, language_id=language, stdin=stdin or "")
    try:
        return _dispatch(request)
    except ExecutionError as e:
        return e.to_result()
    except Exception as e:
        logger.exception("Unexpected failure while executing %s code", language)
        return InternalError(str(e) or e.__class__.__name__).to_result()
