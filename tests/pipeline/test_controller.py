"""Tests for the trigger controller."""

import asyncio

from jqlive.models import Indentation
from jqlive.pipeline import ExecutionGate, TriggerController
from jqlive.settings import SettingsStore

from .stubs import RecordingInvoker


def make_controller(**kwargs):
    invoker = RecordingInvoker(delay=0.01)
    submitted = []
    gate = ExecutionGate(invoker, lambda handle, result: None)
    original_submit = gate.submit

    def submit(request):
        submitted.append(request)
        return original_submit(request)

    gate.submit = submit
    settings = SettingsStore()
    return TriggerController(gate, settings, **kwargs), gate, settings, submitted


def test_each_edit_submits_a_fresh_snapshot():
    async def main():
        controller, gate, _, submitted = make_controller()
        controller.document_changed('{"a": 1}')
        controller.query_changed(".a")
        await gate.wait_idle()
        return submitted

    submitted = asyncio.run(main())
    assert [(r.document, r.query) for r in submitted] == [
        ('{"a": 1}', "."),
        ('{"a": 1}', ".a"),
    ]


def test_options_are_read_when_the_request_is_built():
    async def main():
        controller, gate, settings, submitted = make_controller(document="{}")
        controller.refresh()
        settings.set("indentationMode", "Minified")
        await gate.wait_idle()
        return submitted

    submitted = asyncio.run(main())
    assert len(submitted) == 2
    assert submitted[0].options.indentation is Indentation.TWO_SPACES
    assert submitted[1].options.indentation is Indentation.MINIFIED


def test_detach_stops_settings_triggers():
    async def main():
        controller, gate, settings, submitted = make_controller()
        controller.detach()
        settings.set("sortKeys", True)
        await gate.wait_idle()
        return submitted

    assert asyncio.run(main()) == []


def test_receive_data_accepts_json_text_only():
    async def main():
        controller, gate, _, submitted = make_controller()
        ignored = controller.receive_data("text", "hello")
        taken = controller.receive_data("json", '{"b": 2}')
        not_text = controller.receive_data("json", {"b": 2})
        await gate.wait_idle()
        return controller, submitted, ignored, taken, not_text

    controller, submitted, ignored, taken, not_text = asyncio.run(main())
    assert ignored is None
    assert not_text is None
    assert taken is not None
    assert controller.document == '{"b": 2}'
    assert len(submitted) == 1


def test_load_submits_once():
    async def main():
        controller, gate, _, submitted = make_controller()
        controller.load('{"a": 1}', ".a")
        await gate.wait_idle()
        return submitted

    submitted = asyncio.run(main())
    assert [(r.document, r.query) for r in submitted] == [('{"a": 1}', ".a")]


def test_default_query_is_identity():
    controller, _, _, _ = make_controller()
    assert controller.query == "."
    assert controller.snapshot().query == "."
