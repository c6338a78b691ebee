# codesurfer/results.py
"""
Request and result value objects shared by every execution path.
"""

from dataclasses import dataclass
from typing import Dict, Optional

# Shown when a program ran cleanly but printed nothing.
EMPTY_OUTPUT = "Program executed successfully, but no output was produced."


@dataclass(frozen=True)
class ExecutionRequest:
    source_code: str
    language_id: str
    stdin: str = ""


@dataclass
class ExecutionResult:
    """
    Unified outcome of one execution.

    `output` is the only thing the console displays. `error_kind` names the
    failure category (see codesurfer.errors) and is None on success.
    """

    output: str
    error_kind: Optional[str] = None
    used_fallback: bool = False
    use_client_fallback: bool = False

    @property
    def is_error(self) -> bool:
        return self.error_kind is not None

    @classmethod
    def from_stdout(cls, stdout: str) -> "ExecutionResult":
        return cls(output=stdout or EMPTY_OUTPUT)

    def to_payload(self, language: Optional[str] = None) -> Dict:
        payload: Dict = {"output": self.output}
        if self.use_client_fallback:
            payload["useClientFallback"] = True
            if language:
                payload["language"] = language
        return payload
