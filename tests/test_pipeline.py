import asyncio

from metrom_aptos.core.pipeline import Pipeline, Step
from metrom_aptos.core.progress import RecordingProgressReporter
from metrom_aptos.errors import StepFailed


def _run(steps):
    reporter = RecordingProgressReporter()
    result = asyncio.run(Pipeline(reporter).run(steps))
    return result, reporter


class TestPipeline:
    def test_runs_sync_and_async_steps_in_order(self):
        calls = []

        def first(update):
            calls.append("first")
            return "first done"

        async def second(update):
            calls.append("second")
            return "second done"

        result, reporter = _run([Step("first", "First", first), Step("second", "Second", second)])

        assert calls == ["first", "second"]
        assert result.ok
        assert result.exit_code == 0
        assert [step.message for step in result.steps] == ["first done", "second done"]
        assert reporter.statuses() == [
            ("start", "first"), ("succeed", "first"),
            ("start", "second"), ("succeed", "second"),
        ]

    def test_stops_at_first_failure(self):
        calls = []

        def ok(update):
            calls.append("ok")
            return "ok"

        async def boom(update):
            raise ConnectionError("faucet unreachable")

        def never(update):
            calls.append("never")

        result, reporter = _run([
            Step("ok", "Ok", ok),
            Step("fund", "Funding", boom, "Could not fund deployment account"),
            Step("never", "Never", never),
        ])

        assert calls == ["ok"]
        assert not result.ok
        assert result.exit_code == 1
        assert result.names() == ["ok", "fund"]
        assert result.failed_step.message == "Could not fund deployment account: faucet unreachable"
        assert isinstance(result.failed_step.error, ConnectionError)
        assert ("fail", "fund") in reporter.statuses()
        assert ("start", "never") not in reporter.statuses()

    def test_step_failed_message_is_reported_verbatim(self):
        def check(update):
            raise StepFailed("Check failed: expected 1 module to be published, but 0 were instead")

        result, reporter = _run([Step("check", "Checking", check, "Check failed")])

        assert result.failed_step.message == "Check failed: expected 1 module to be published, but 0 were instead"
        assert reporter.events[-1] == ("fail", "check", result.failed_step.message)

    def test_update_is_forwarded_to_reporter(self):
        async def publish(update):
            update("Publish transaction broadcast on-chain with hash 0x1")
            return "confirmed"

        _, reporter = _run([Step("publish", "Publishing", publish)])

        assert ("update", "publish", "Publish transaction broadcast on-chain with hash 0x1") in reporter.events

    def test_empty_message_falls_back_to_title(self):
        result, _ = _run([Step("quiet", "Quiet step", lambda update: None)])
        assert result.steps[0].message == "Quiet step"

