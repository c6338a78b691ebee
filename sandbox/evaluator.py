# sandbox/evaluator.py
"""
JavaScript/TypeScript evaluation with console capture.

The playground used to evaluate these languages with `new Function(code)()`
inside the browser tab. Server-side the same contract is kept, but evaluation
happens in a separate node process running sandbox.harness, so a failing or
misbehaving program cannot leak a patched console into the service.
"""

import logging
import shutil

from codesurfer.errors import ExecutionError, InternalError, ToolchainMissing
from codesurfer.preprocess import preprocess
from codesurfer.results import EMPTY_OUTPUT, ExecutionResult
from sandbox.harness import build_harness, parse_report
from sandbox.runner import RUN_TIMEOUT_SECS, run_process
from sandbox.workspace import scratch_workspace, write_file

logger = logging.getLogger(__name__)

HARNESS_FILENAME = "harness.js"


def _label(language_id: str) -> str:
    return "TypeScript" if (language_id or "").strip().lower() == "typescript" else "JavaScript"


def evaluate(source_code: str, language_id: str = "javascript", stdin: str = "") -> ExecutionResult:
    """
    Evaluate a program and return what it printed through console.log.

    Any exception thrown by the program becomes "<Language> Error: <message>";
    compile-time and run-time failures are not told apart.
    """
    label = _label(language_id)
    try:
        node = shutil.which("node")
        if not node:
            raise ToolchainMissing("Node.js")

        harness = build_harness(preprocess(source_code, language_id, strip_types=True), stdin)
        with scratch_workspace() as workspace:
            path = write_file(workspace, HARNESS_FILENAME, harness)
            proc = run_process([node, path], cwd=workspace, timeout=RUN_TIMEOUT_SECS)
    except ExecutionError as e:
        return e.to_result()
    except Exception as e:
        logger.exception("Evaluator internal error")
        return InternalError(str(e)).to_result()

    report = parse_report(proc.stdout)
    if report is None:
        # node died before the exit hook could report
        if proc.stderr:
            return ExecutionResult(output=f"{label} Error: {proc.stderr.strip()}", error_kind="runtime_error")
        if proc.returncode != 0:
            reason = (
                f"terminated by signal {-proc.returncode}"
                if proc.returncode < 0
                else f"process exited with code {proc.returncode}"
            )
            return ExecutionResult(output=f"{label} Error: {reason}", error_kind="runtime_error")
        return ExecutionResult.from_stdout(proc.stdout)

    if not report.get("restored", True):
        logger.warning("Harness failed to restore console.log")
    if report.get("error") is not None:
        return ExecutionResult(output=f"{label} Error: {report['error']}", error_kind="runtime_error")
    exit_code = report.get("exitCode") or 0
    if exit_code != 0:
        detail = (proc.stderr or "").strip() or f"process exited with code {exit_code}"
        return ExecutionResult(output=f"{label} Error: {detail}", error_kind="runtime_error")
    return ExecutionResult(output=report.get("output") or EMPTY_OUTPUT)
