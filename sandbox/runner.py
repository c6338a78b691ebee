# sandbox/runner.py
"""
Local compile-and-run execution on the host's own toolchains.

Used when no remote execution service is configured (or, optionally, when it is
unreachable). There is no isolation beyond a scratch directory and a wall-clock
timeout: programs run with the server's own privileges.
"""

import json
import logging
import shutil
import subprocess
from dataclasses import dataclass
from typing import List, Optional, Tuple

from codesurfer.errors import (
    CompilationError,
    ExecutionError,
    ExecutionTimeout,
    InternalError,
    ProgramRuntimeError,
    ToolchainMissing,
    UnsupportedLanguage,
)
from codesurfer.languages import resolve
from codesurfer.preprocess import preprocess
from codesurfer.results import ExecutionResult
from sandbox.workspace import scratch_workspace, write_file

logger = logging.getLogger(__name__)

# Fixed wall-clock bounds, seconds
COMPILE_TIMEOUT_SECS = 10
RUN_TIMEOUT_SECS = 10

INPUT_FILENAME = "input.txt"

_TSCONFIG = {
    "compilerOptions": {"target": "ES2020", "module": "commonjs", "outDir": ".", "strict": False},
    "files": ["main.ts"],
}


@dataclass(frozen=True)
class Toolchain:
    """
    How to build and run one language.

    Commands are argument lists; the first element is a binary name that is
    looked up on PATH, and "{dir}" in any argument is replaced by the workspace.
    """

    name: str
    binaries: Tuple[str, ...]
    run: Tuple[str, ...]
    compile: Optional[Tuple[str, ...]] = None


TOOLCHAINS = {
    "java": Toolchain("Java", ("javac", "java"), ("java", "-cp", "{dir}", "Main"), ("javac", "Main.java")),
    "c": Toolchain("GCC", ("gcc",), ("{dir}/program",), ("gcc", "program.c", "-o", "program")),
    "cpp": Toolchain("G++", ("g++",), ("{dir}/program",), ("g++", "program.cpp", "-o", "program")),
    "python": Toolchain("Python 3", ("python3",), ("python3", "main.py")),
    "ruby": Toolchain("Ruby", ("ruby",), ("ruby", "main.rb")),
    # The dispatcher sends javascript/typescript to sandbox.evaluator; these two
    # entries serve direct run_local() callers only.
    "javascript": Toolchain("Node.js", ("node",), ("node", "main.js")),
    "typescript": Toolchain("TypeScript (tsc)", ("tsc", "node"), ("node", "main.js"), ("tsc", "-p", ".")),
}


def _locate(toolchain: Toolchain) -> dict:
    """
    Resolve every binary the toolchain needs, or raise ToolchainMissing.
    """
    found = {}
    for binary in toolchain.binaries:
        path = shutil.which(binary)
        if not path:
            raise ToolchainMissing(toolchain.name)
        found[binary] = path
    return found


def _command(template: Tuple[str, ...], workspace: str, binaries: dict) -> List[str]:
    cmd = [arg.replace("{dir}", workspace) for arg in template]
    cmd[0] = binaries.get(cmd[0], cmd[0])
    return cmd


def run_process(cmd: List[str], cwd: str, timeout: int, stdin_path: Optional[str] = None) -> subprocess.CompletedProcess:
    """
    Run one command to completion. subprocess kills the child when the bound
    expires; that is reported as ExecutionTimeout.
    """
    try:
        if stdin_path:
            with open(stdin_path, "r", encoding="utf-8") as stdin:
                return subprocess.run(cmd, cwd=cwd, stdin=stdin, capture_output=True, text=True, timeout=timeout)
        return subprocess.run(
            cmd, cwd=cwd, stdin=subprocess.DEVNULL, capture_output=True, text=True, timeout=timeout
        )
    except subprocess.TimeoutExpired as e:
        raise ExecutionTimeout(timeout) from e


def _compile(cmd: List[str], workspace: str) -> None:
    proc = run_process(cmd, cwd=workspace, timeout=COMPILE_TIMEOUT_SECS)
    stderr = proc.stderr or ""
    if proc.returncode != 0 or stderr.strip():
        raise CompilationError(stderr or proc.stdout or f"compiler exited with code {proc.returncode}")


def run_local(source_code: str, language_id: str, stdin: str = "") -> ExecutionResult:
    """
    Compile (if needed) and run a program in a fresh scratch directory.

    Every failure, including an unexpected one, comes back as error text. The
    scratch directory never outlives the call.
    """
    try:
        descriptor = resolve(language_id)
        toolchain = TOOLCHAINS.get(descriptor.id)
        if toolchain is None:
            raise UnsupportedLanguage(descriptor.id, where="local execution")
        binaries = _locate(toolchain)

        with scratch_workspace() as workspace:
            write_file(workspace, descriptor.scratch_filename, preprocess(source_code, descriptor.id))
            if descriptor.id == "typescript":
                write_file(workspace, "tsconfig.json", json.dumps(_TSCONFIG, indent=2))
            stdin_path = write_file(workspace, INPUT_FILENAME, stdin) if stdin else None

            if toolchain.compile:
                _compile(_command(toolchain.compile, workspace, binaries), workspace)

            proc = run_process(
                _command(toolchain.run, workspace, binaries),
                cwd=workspace,
                timeout=RUN_TIMEOUT_SECS,
                stdin_path=stdin_path,
            )

        # stderr is the failure signal; a silent nonzero exit still counts as one
        if proc.stderr:
            raise ProgramRuntimeError(proc.stderr)
        if proc.returncode < 0:
            raise ProgramRuntimeError(f"terminated by signal {-proc.returncode}")
        if proc.returncode != 0:
            raise ProgramRuntimeError(f"process exited with code {proc.returncode}")
        return ExecutionResult.from_stdout(proc.stdout)

    except ExecutionError as e:
        logger.debug("Local %s execution failed: %s", language_id, e.kind)
        return e.to_result()
    except Exception as e:
        logger.exception("Local runner internal error")
        return InternalError(str(e)).to_result()
