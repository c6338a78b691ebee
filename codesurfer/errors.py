# codesurfer/errors.py
"""
Failure categories of the execution path.

Adapters raise these internally and turn them into an ExecutionResult at their
own boundary; the console only ever receives text.
"""

from codesurfer.results import ExecutionResult


class ExecutionError(Exception):
    kind = "internal_error"
    prefix = "Error: "

    def __init__(self, detail: str = ""):
        super().__init__(detail)
        self.detail = detail

    def render(self) -> str:
        return f"{self.prefix}{self.detail}"

    def to_result(self) -> ExecutionResult:
        return ExecutionResult(output=self.render(), error_kind=self.kind)


class UnsupportedLanguage(ExecutionError):
    kind = "unsupported_language"

    def __init__(self, language_id: str, where: str = ""):
        super().__init__(language_id)
        self.language_id = language_id
        self.where = where

    def render(self) -> str:
        suffix = f" for {self.where}" if self.where else ""
        return f"Language '{self.language_id}' is not supported{suffix}."


class CompilationError(ExecutionError):
    kind = "compilation_error"
    prefix = "Compilation Error: "


class ProgramRuntimeError(ExecutionError):
    kind = "runtime_error"
    prefix = "Runtime Error: "


class ExecutionTimeout(ExecutionError):
    kind = "timeout"

    def __init__(self, seconds: int):
        super().__init__(str(seconds))
        self.seconds = seconds

    def render(self) -> str:
        return f"Execution timed out after {self.seconds} seconds"


class ToolchainMissing(ExecutionError):
    kind = "toolchain_missing"

    def __init__(self, tool: str):
        super().__init__(tool)
        self.tool = tool

    def render(self) -> str:
        return f"{self.tool} is not installed on the server"


class TransportError(ExecutionError):
    kind = "transport_error"
    prefix = "Error: Failed to execute code with Piston: "


class InternalError(ExecutionError):
    kind = "internal_error"
    prefix = "Error: "
