"""Tests for ReactiveController sequencing, failure handling and commit."""

import io

import pytest

from conftest import RecordingSink, ScriptedEngine, wait_until
from ijq.application.controller import ReactiveController
from ijq.application.history import History
from ijq.domain.errors import EngineUnavailableError
from ijq.domain.events import EventBus, FilterChanged, SuggestionsReady
from ijq.domain.types import Failure, InputStyle, Success


class TestSequencing:
    """Results are applied in request order, not completion order."""

    @pytest.mark.asyncio
    async def test_later_request_wins_when_it_finishes_first(self, document, history, sink, object_engine):
        slow = object_engine.hold(".a")
        controller = ReactiveController(object_engine, document, sink, history)
        await controller.start()
        try:
            first = controller.filter_changed(".a")
            second = controller.filter_changed(".b")

            await wait_until(lambda: controller.last_applied == second)
            assert sink.outputs == ["2\n"]

            slow.set()
            await controller.drain()

            assert first < second
            assert sink.outputs == ["2\n"]
            assert controller.output == "2\n"
            assert controller.last_applied == second
        finally:
            await controller.stop()

    @pytest.mark.asyncio
    async def test_in_order_completion_applies_both(self, document, history, sink, object_engine):
        controller = ReactiveController(object_engine, document, sink, history)
        await controller.start()
        try:
            controller.filter_changed(".a")
            await controller.drain()
            controller.filter_changed(".b")
            await controller.drain()

            assert sink.outputs == ["1\n", "2\n"]
            assert controller.last_applied == 1
            assert object_engine.calls == [
                (document.text, ".a", document.configuration),
                (document.text, ".b", document.configuration),
            ]
        finally:
            await controller.stop()

    @pytest.mark.asyncio
    async def test_stale_failure_does_not_mark_newer_success_as_error(self, document, history, sink):
        engine = ScriptedEngine(responses={".a": Success(output="1\n")})
        slow = engine.hold(".a |")
        controller = ReactiveController(engine, document, sink, history)
        await controller.start()
        try:
            controller.filter_changed(".a |")
            newest = controller.filter_changed(".a")
            await wait_until(lambda: controller.last_applied == newest)

            slow.set()
            await controller.drain()

            assert sink.styles == [InputStyle.NORMAL]
            assert sink.errors == [""]
        finally:
            await controller.stop()

    @pytest.mark.asyncio
    async def test_filter_changed_event_triggers_evaluation(self, document, history, sink, object_engine):
        bus = EventBus()
        controller = ReactiveController(object_engine, document, sink, history, event_bus=bus)
        await controller.start()
        try:
            bus.publish(FilterChanged(text=".a"))
            await controller.drain()

            assert sink.outputs == ["1\n"]
        finally:
            await controller.stop()


class TestFailures:
    """A failing filter never blanks the last good output."""

    @pytest.mark.asyncio
    async def test_failure_keeps_previous_output(self, document, history, sink, object_engine):
        controller = ReactiveController(object_engine, document, sink, history)
        await controller.start()
        try:
            controller.filter_changed(".a")
            await controller.drain()
            before = sink.rendered_output()

            controller.filter_changed(".a[")
            await controller.drain()

            assert sink.rendered_output() == before == "1\n"
            assert sink.outputs == ["1\n"]
            assert controller.output == "1\n"
            assert sink.styles[-1] is InputStyle.ERROR
            assert "cannot evaluate .a[" in sink.errors[-1]
        finally:
            await controller.stop()

    @pytest.mark.asyncio
    async def test_success_after_failure_restores_normal_style(self, document, history, sink, object_engine):
        controller = ReactiveController(object_engine, document, sink, history)
        await controller.start()
        try:
            controller.filter_changed("nope")
            await controller.drain()
            controller.filter_changed(".b")
            await controller.drain()

            assert sink.styles == [InputStyle.ERROR, InputStyle.NORMAL]
            assert sink.errors[-1] == ""
            assert sink.outputs == ["2\n"]
        finally:
            await controller.stop()

    @pytest.mark.asyncio
    async def test_missing_engine_is_recorded_as_fatal(self, document, history, sink):
        class BrokenEngine:
            async def evaluate(self, document_text, filter_text, configuration):
                raise EngineUnavailableError("jq", "No such file or directory")

        controller = ReactiveController(BrokenEngine(), document, sink, history)
        await controller.start()
        try:
            controller.filter_changed(".")
            await controller.drain()

            assert isinstance(controller.fatal_error, EngineUnavailableError)
            assert sink.styles == [InputStyle.ERROR]
        finally:
            await controller.stop()


class TestPreview:
    @pytest.mark.asyncio
    async def test_preview_shows_document(self, document, history, sink, object_engine):
        controller = ReactiveController(object_engine, document, sink, history)

        await controller.load_preview()

        assert sink.previews == ['{\n  "a": 1,\n  "b": 2\n}\n']

    @pytest.mark.asyncio
    async def test_preview_of_invalid_document_shows_diagnostic(self, document, history, sink):
        engine = ScriptedEngine(responses={".": Failure(diagnostic="jq: error (at <stdin>:1): bad\n")})
        controller = ReactiveController(engine, document, sink, history)

        await controller.load_preview()

        assert sink.previews == ["jq: error (at <stdin>:1): bad\n"]
        assert controller.fatal_error is None


class TestCommit:
    """Commit writes output to stdout, the filter to stderr, and records history."""

    @pytest.mark.asyncio
    async def test_commit_writes_both_channels(self, document, history, object_engine):
        sink = RecordingSink(text=".a")
        controller = ReactiveController(object_engine, document, sink, history)
        await controller.start()
        try:
            controller.filter_changed(".a")
            await controller.drain()
        finally:
            await controller.stop()

        stdout, stderr = io.StringIO(), io.StringIO()
        result = controller.commit(stdout, stderr)

        assert stdout.getvalue() == "1\n"
        assert stderr.getvalue() == ".a\n"
        assert result.recorded is True
        assert history.entries() == [".a"]

    def test_commit_twice_records_once(self, tmp_path, document, object_engine):
        path = tmp_path / "history"
        history = History(path=str(path))
        sink = RecordingSink(text=".a")
        controller = ReactiveController(object_engine, document, sink, history)

        first = controller.commit(io.StringIO(), io.StringIO())
        second = controller.commit(io.StringIO(), io.StringIO())

        assert first.recorded is True
        assert second.recorded is False
        assert path.read_text(encoding="utf-8") == ".a\n"

    def test_commit_distinct_filters_in_order(self, tmp_path, document, object_engine):
        path = tmp_path / "history"
        history = History(path=str(path))
        sink = RecordingSink(text=".a")
        controller = ReactiveController(object_engine, document, sink, history)

        controller.commit(io.StringIO(), io.StringIO())
        sink.text = ".b"
        controller.commit(io.StringIO(), io.StringIO())

        assert path.read_text(encoding="utf-8") == ".a\n.b\n"
        assert History.load(str(path)).entries() == [".a", ".b"]

    def test_empty_filter_is_not_recorded(self, document, history, object_engine):
        sink = RecordingSink(text="")
        controller = ReactiveController(object_engine, document, sink, history)

        stderr = io.StringIO()
        result = controller.commit(io.StringIO(), stderr)

        assert result.recorded is False
        assert stderr.getvalue() == "\n"
        assert len(history) == 0


class TestSuggestionRefresh:
    @pytest.mark.asyncio
    async def test_ready_suggestions_request_redraw(self, document, history, sink, object_engine):
        bus = EventBus()
        ready: list[SuggestionsReady] = []
        bus.subscribe(SuggestionsReady, ready.append)
        controller = ReactiveController(object_engine, document, sink, history, event_bus=bus)
        await controller.start()
        try:
            assert controller.complete(".") == []
            await controller.drain()

            assert sink.redraws == 1
            assert [event.prefix for event in ready] == [""]
            assert controller.complete(".") == [".a", ".b"]
        finally:
            await controller.stop()
