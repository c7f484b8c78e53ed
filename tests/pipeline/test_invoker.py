"""Tests for the subprocess invoker, run against the fake jq script."""

import asyncio
import json
import time

from jqlive.models import FormattingOptions, QueryRequest
from jqlive.pipeline import CancellationSignal, ProcessInvoker

from .stubs import skip_on_windows


def run(invoker, request, signal=None):
    async def main():
        return await invoker.invoke(request, signal or CancellationSignal())

    return asyncio.run(main())


def test_field_selection(fake_jq_command):
    result = run(
        ProcessInvoker(fake_jq_command),
        QueryRequest(document='{"a":1,"b":2}', query=".a"),
    )
    assert result.status == "completed"
    assert result.exit_code == 0
    assert result.stdout == "1"
    assert result.stderr == ""


def test_formatting_flags_reach_the_process(fake_jq_command):
    request = QueryRequest(
        document='{"b": 1, "a": {"c": 2}}',
        query=".",
        options=FormattingOptions(indentation="Minified", sort_keys=True),
    )
    result = run(ProcessInvoker(fake_jq_command), request)
    assert result.stdout == '{"a":{"c":2},"b":1}'


def test_four_space_indent(fake_jq_command):
    request = QueryRequest(
        document='{"a": 1}',
        options=FormattingOptions(indentation="FourSpaces"),
    )
    result = run(ProcessInvoker(fake_jq_command), request)
    assert result.stdout == json.dumps({"a": 1}, indent=4)


def test_tab_indent(fake_jq_command):
    request = QueryRequest(
        document='{"a": 1}',
        options=FormattingOptions(indentation="OneTab"),
    )
    result = run(ProcessInvoker(fake_jq_command), request)
    assert result.stdout == '{\n\t"a": 1\n}'


def test_syntax_error_reports_stderr(fake_jq_command):
    result = run(ProcessInvoker(fake_jq_command), QueryRequest(document="{}", query="{"))
    assert result.status == "completed"
    assert result.exit_code != 0
    assert "syntax error" in result.stderr


def test_stderr_kept_on_success(fake_jq_command):
    result = run(
        ProcessInvoker(fake_jq_command), QueryRequest(document='{"a":1}', query="debug")
    )
    assert result.succeeded
    assert result.stderr.startswith('["DEBUG:"')


def test_empty_document_still_invokes_process(fake_jq_command, tmp_path, monkeypatch):
    log = tmp_path / "calls.log"
    monkeypatch.setenv("FAKE_JQ_LOG", str(log))
    result = run(ProcessInvoker(fake_jq_command), QueryRequest(document="", query="."))
    assert result.succeeded
    assert result.stdout == ""
    assert log.read_text().count("start") == 1


def test_cancelled_before_start_spawns_nothing(fake_jq_command, tmp_path, monkeypatch):
    log = tmp_path / "calls.log"
    monkeypatch.setenv("FAKE_JQ_LOG", str(log))
    signal = CancellationSignal()
    signal.cancel()

    result = run(ProcessInvoker(fake_jq_command), QueryRequest(document="{}"), signal)

    assert result.was_cancelled
    assert not log.exists()


@skip_on_windows
def test_cancel_terminates_running_process(fake_jq_command, jq_delay):
    jq_delay(30)

    async def main():
        signal = CancellationSignal()
        invoker = ProcessInvoker(fake_jq_command, kill_grace_seconds=1)
        task = asyncio.ensure_future(invoker.invoke(QueryRequest(document="{}"), signal))
        await asyncio.sleep(0.5)
        started = time.monotonic()
        signal.cancel()
        result = await asyncio.wait_for(task, 10)
        return result, time.monotonic() - started

    result, elapsed = asyncio.run(main())
    assert result.was_cancelled
    assert elapsed < 5


@skip_on_windows
def test_timeout_turns_into_failure(fake_jq_command, jq_delay):
    jq_delay(30)
    invoker = ProcessInvoker(fake_jq_command, timeout_seconds=0.5, kill_grace_seconds=1)
    result = run(invoker, QueryRequest(document="{}"))
    assert result.invocation_failed
    assert "did not finish within 0.5 seconds" in result.error


def test_missing_binary_is_a_failure_result(tmp_path):
    invoker = ProcessInvoker([str(tmp_path / "no-such-jq")])
    result = run(invoker, QueryRequest(document="{}"))
    assert result.invocation_failed
    assert result.exit_code is None
    assert result.error


def test_unresolvable_jq_is_a_failure_result(tmp_path, monkeypatch):
    monkeypatch.setenv("PATH", str(tmp_path))
    result = run(ProcessInvoker(), QueryRequest(document="{}"))
    assert result.invocation_failed
    assert "jq not found" in result.error


def test_from_settings_uses_configured_path(fake_jq_binary):
    from jqlive.models import Settings

    settings = Settings(jq_path=str(fake_jq_binary), timeout_seconds=3)
    invoker = ProcessInvoker.from_settings(settings)
    assert invoker.command == [str(fake_jq_binary)]
    result = run(invoker, QueryRequest(document='{"a": [1]}', query=".a"))
    assert result.stdout == "[\n  1\n]"
