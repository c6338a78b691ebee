import json
import logging
import shutil

import pytest
import requests

from codesurfer import config, controller, main, remote
from codesurfer.results import ExecutionResult
from sandbox import evaluator, runner

from conftest import FakeResponse, completed, harness_stdout


def _post(client, body):
    return client.post("/api/execute", data=json.dumps(body), content_type="application/json")


def test_health(client) -> None:
    resp = client.get("/health")
    assert resp.status_code == 200
    assert resp.get_json() == {"ok": True}


def test_python_via_remote_service(client, remote_enabled, monkeypatch) -> None:
    monkeypatch.setattr(
        remote.requests, "post", lambda url, json=None, timeout=None: FakeResponse({"run": {"stdout": "hi\n", "stderr": ""}})
    )
    resp = _post(client, {"code": "print('hi')", "language": "python"})
    assert resp.status_code == 200
    assert resp.get_json() == {"output": "hi\n"}


def test_java_runtime_error_on_local_toolchain(client, remote_disabled, monkeypatch) -> None:
    def fake_run(cmd, cwd=None, **kwargs):
        if cmd[0].endswith("javac"):
            return completed(cmd)
        return completed(cmd, 1, "", "Exception in thread \"main\" java.lang.ArithmeticException: / by zero\n")

    monkeypatch.setattr(runner.shutil, "which", lambda binary: f"/usr/bin/{binary}")
    monkeypatch.setattr(runner.subprocess, "run", fake_run)

    resp = _post(client, {"code": "System.out.println(1/0);", "language": "java"})
    assert resp.status_code == 200
    assert resp.get_json()["output"].startswith("Runtime Error: ")


def test_javascript_goes_to_evaluator(client, remote_enabled, monkeypatch) -> None:
    def fail_post(*args, **kwargs):
        raise AssertionError("javascript must not reach the remote service")

    report = json.dumps({"output": "x\n", "error": None, "restored": True})
    monkeypatch.setattr(remote.requests, "post", fail_post)
    monkeypatch.setattr(evaluator.shutil, "which", lambda binary: "/usr/bin/node")
    monkeypatch.setattr(runner.subprocess, "run", lambda cmd, **kwargs: completed(cmd, 0, harness_stdout(report), ""))

    resp = _post(client, {"code": "console.log('x')", "language": "javascript"})
    assert resp.get_json() == {"output": "x\n"}


@pytest.mark.skipif(shutil.which("node") is None, reason="node is not installed")
def test_javascript_end_to_end_with_node(client) -> None:
    resp = _post(client, {"code": "console.log('x')", "language": "javascript"})
    assert resp.get_json()["output"] == "x\n"


def test_missing_node_asks_client_to_evaluate(client, monkeypatch) -> None:
    monkeypatch.setattr(evaluator.shutil, "which", lambda binary: None)
    resp = _post(client, {"code": "console.log('x')", "language": "javascript"})
    assert resp.status_code == 200
    assert resp.get_json() == {
        "output": "Node.js is not installed on the server",
        "useClientFallback": True,
        "language": "javascript",
    }


@pytest.mark.parametrize(
    "body",
    [{"code": "print(1)"}, {"language": "python"}, {"code": "", "language": "python"}, {}],
)
def test_missing_fields(client, body) -> None:
    resp = _post(client, body)
    assert resp.status_code == 400
    assert resp.get_json() == {"error": "Code and language are required"}


def test_invalid_json(client) -> None:
    resp = client.post("/api/execute", data="{not json", content_type="application/json")
    assert resp.status_code == 400
    assert resp.get_json() == {"error": "Invalid JSON payload."}


def test_wrong_input_type(client) -> None:
    resp = _post(client, {"code": "print(1)", "language": "python", "input": 5})
    assert resp.status_code == 400
    assert resp.get_json() == {"error": "'input' must be a string."}


def test_code_too_large(client, monkeypatch) -> None:
    monkeypatch.setattr(config, "MAX_CODE_SIZE", 10)
    resp = _post(client, {"code": "print('far too long')", "language": "python"})
    assert resp.status_code == 400
    assert "too large" in resp.get_json()["error"]


def test_unsupported_language_runs_nothing(client, remote_enabled, monkeypatch) -> None:
    def fail_post(*args, **kwargs):
        raise AssertionError("unsupported languages must not be sent")

    monkeypatch.setattr(remote.requests, "post", fail_post)
    resp = _post(client, {"code": "+++", "language": "brainfuck"})
    assert resp.status_code == 200
    assert resp.get_json() == {"output": "Language 'brainfuck' is not supported."}


def test_unexpected_failure_is_500(client, monkeypatch) -> None:
    def explode(*args, **kwargs):
        raise RuntimeError("kaboom")

    monkeypatch.setattr(main, "execute_code", explode)
    resp = _post(client, {"code": "print(1)", "language": "python"})
    assert resp.status_code == 500
    assert resp.get_json() == {"error": "Failed to execute code"}


def test_languages_and_templates(client) -> None:
    langs = client.get("/api/languages").get_json()
    assert {"id": "cpp", "name": "C++", "extension": "cpp"} in langs

    resp = client.get("/api/templates/python")
    assert resp.get_json()["code"].startswith("# Python Hello World")
    assert client.get("/api/templates/go").get_json()["code"] == "// Start coding here"
    assert client.get("/api/templates/cobol").status_code == 404


def test_failed_local_run_is_logged_once(client, remote_disabled, monkeypatch, caplog) -> None:
    monkeypatch.setattr(runner.shutil, "which", lambda binary: f"/usr/bin/{binary}")
    monkeypatch.setattr(runner.subprocess, "run", lambda cmd, **kwargs: completed(cmd, 1, "", "boom\n"))

    with caplog.at_level(logging.DEBUG):
        resp = _post(client, {"code": "raise SystemExit('boom')", "language": "python"})

    assert resp.get_json() == {"output": "Runtime Error: boom\n"}
    warnings = [r for r in caplog.records if r.levelno == logging.WARNING]
    assert len(warnings) == 1
    assert "runtime_error" in warnings[0].getMessage()


class TestDispatcher:
    def test_remote_failure_is_terminal_by_default(self, remote_enabled, monkeypatch) -> None:
        def refuse(*args, **kwargs):
            raise requests.ConnectionError("refused")

        def fail_local(*args, **kwargs):
            raise AssertionError("no local retry without the fallback flag")

        monkeypatch.setattr(remote.requests, "post", refuse)
        monkeypatch.setattr(controller, "run_local", fail_local)
        result = controller.execute_code("print(1)", "python")
        assert result.error_kind == "transport_error"
        assert not result.used_fallback

    def test_local_fallback_when_enabled(self, remote_enabled, monkeypatch) -> None:
        def refuse(*args, **kwargs):
            raise requests.ConnectionError("refused")

        monkeypatch.setattr(config, "LOCAL_FALLBACK", True)
        monkeypatch.setattr(remote.requests, "post", refuse)
        monkeypatch.setattr(controller, "run_local", lambda code, lang, stdin: ExecutionResult(output="1\n"))
        result = controller.execute_code("print(1)", "python")
        assert result.output == "1\n"
        assert result.used_fallback

    def test_no_remote_service_uses_local(self, remote_disabled, monkeypatch) -> None:
        seen = []
        monkeypatch.setattr(
            controller, "run_local", lambda code, lang, stdin: seen.append((code, lang, stdin)) or ExecutionResult("ok")
        )
        assert controller.execute_code("puts 1", "Ruby", "in").output == "ok"
        assert seen == [("puts 1", "ruby", "in")]

    def test_internal_error_is_text(self, monkeypatch) -> None:
        def explode(request):
            raise KeyError("boom")

        monkeypatch.setattr(controller, "_dispatch", explode)
        result = controller.execute_code("x", "python")
        assert result.output.startswith("Error: ")
        assert result.error_kind == "internal_error"
