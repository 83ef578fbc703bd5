import logging
from typing import List, Tuple


class ProgressReporter:
    """
    Receives step lifecycle events from a pipeline.

    Subclasses decide how to render them; the base class ignores everything,
    which makes it usable as a silent reporter.
    """

    def start(self, step: str, text: str) -> None:
        pass

    def update(self, step: str, text: str) -> None:
        pass

    def succeed(self, step: str, text: str) -> None:
        pass

    def fail(self, step: str, text: str) -> None:
        pass

    def warn(self, step: str, text: str) -> None:
        pass


class LoggingProgressReporter(ProgressReporter):
    def __init__(self, logger: logging.Logger = None):
        self.logger = logger or logging.getLogger("metrom_aptos.progress")

    def start(self, step, text):
        self.logger.info(f"- {text}...", extra={"step": step, "status": "started"})

    def update(self, step, text):
        self.logger.info(f"  {text}", extra={"step": step, "status": "running"})

    def succeed(self, step, text):
        self.logger.info(f"✔ {text}", extra={"step": step, "status": "succeeded"})

    def fail(self, step, text):
        self.logger.error(f"✖ {text}", extra={"step": step, "status": "failed"})

    def warn(self, step, text):
        self.logger.warning(f"⚠ {text}", extra={"step": step, "status": "warning"})


class RecordingProgressReporter(ProgressReporter):
    """Keeps every event in memory, for tests and for callers embedding the workflow."""

    def __init__(self):
        self.events: List[Tuple[str, str, str]] = []

    def start(self, step, text):
        self.events.append(("start", step, text))

    def update(self, step, text):
        self.events.append(("update", step, text))

    def succeed(self, step, text):
        self.events.append(("succeed", step, text))

    def fail(self, step, text):
        self.events.append(("fail", step, text))

    def warn(self, step, text):
        self.events.append(("warn", step, text))

    def statuses(self) -> List[Tuple[str, str]]:
        return [(kind, step) for kind, step, _ in self.events]
