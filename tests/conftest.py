import subprocess
import tempfile

import pytest

from codesurfer import config
from codesurfer.main import app
from sandbox.harness import _RESULT_MARKER

PISTON_TEST_URL = "http://piston.test/api/v2/piston/execute"


class FakeResponse:
    def __init__(self, body=None, status_code=200, text=None):
        self._body = body
        self.status_code = status_code
        self.text = text if text is not None else ""

    def json(self):
        if self._body is None:
            raise ValueError("No JSON object could be decoded")
        return self._body


def completed(cmd, returncode=0, stdout="", stderr=""):
    return subprocess.CompletedProcess(cmd, returncode, stdout, stderr)


def harness_stdout(report_json: str) -> str:
    return _RESULT_MARKER + report_json + "\n"


@pytest.fixture
def client():
    app.config["TESTING"] = True
    with app.test_client() as c:
        yield c


@pytest.fixture
def remote_enabled(monkeypatch):
    monkeypatch.setattr(config, "PISTON_URL", PISTON_TEST_URL)
    monkeypatch.setattr(config, "LOCAL_FALLBACK", False)


@pytest.fixture
def remote_disabled(monkeypatch):
    monkeypatch.setattr(config, "PISTON_URL", "")


@pytest.fixture
def workspaces(monkeypatch):
    """Record every scratch directory created during the test."""
    created = []
    original = tempfile.mkdtemp

    def recording_mkdtemp(*args, **kwargs):
        path = original(*args, **kwargs)
        created.append(path)
        return path

    monkeypatch.setattr(tempfile, "mkdtemp", recording_mkdtemp)
    return created
