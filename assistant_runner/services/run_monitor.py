import logging
import time
from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Callable, Optional

from assistant_runner.config import (
    DEFAULT_MAX_WAIT,
    DEFAULT_OUTPUT_DIR,
    DEFAULT_POLL_INTERVAL,
)
from assistant_runner.errors import RunFailedError, RunTimeoutError, ToolError
from assistant_runner.services.openai_service import (
    list_messages,
    retrieve_run,
    submit_tool_outputs,
)
from assistant_runner.services.tools import execute_tool_call
from assistant_runner.utils.messages import format_transcript


class RunStatus(str, Enum):
    QUEUED = "queued"
    IN_PROGRESS = "in_progress"
    REQUIRES_ACTION = "requires_action"
    CANCELLING = "cancelling"
    COMPLETED = "completed"
    FAILED = "failed"
    CANCELLED = "cancelled"
    EXPIRED = "expired"
    INCOMPLETE = "incomplete"
    UNKNOWN = "unknown"

    @classmethod
    def parse(cls, value) -> "RunStatus":
        try:
            return cls(value)
        except ValueError:
            return cls.UNKNOWN


FAILED_STATUSES = frozenset(
    {
        RunStatus.FAILED,
        RunStatus.CANCELLED,
        RunStatus.EXPIRED,
        RunStatus.INCOMPLETE,
    }
)
WAITING_STATUSES = frozenset(
    {RunStatus.QUEUED, RunStatus.IN_PROGRESS, RunStatus.CANCELLING}
)


@dataclass
class RunOutcome:
    run: Any
    messages: list = field(default_factory=list)
    transcript: list = field(default_factory=list)
    polls: int = 0
    submissions: int = 0


def pending_tool_calls(run) -> list:
    required = getattr(run, "required_action", None)
    submit = getattr(required, "submit_tool_outputs", None)
    return list(getattr(submit, "tool_calls", None) or [])


def _describe_error(last_error):
    if last_error is None:
        return None
    message = getattr(last_error, "message", None)
    code = getattr(last_error, "code", None)
    if message and code:
        return f"{code}: {message}"
    return message or str(last_error)


class RunMonitor:
    """
    Polls a run until it finishes, answering tool calls along the way.

    Every iteration sleeps `poll_interval` seconds and then retrieves the run,
    so a run that is observed N times costs N sleeps. `completed` returns the
    thread transcript; failed, cancelled, expired and incomplete runs raise
    RunFailedError; a run still going after `max_wait` seconds raises
    RunTimeoutError. Pass max_wait=None to poll without a deadline.
    """

    def __init__(
        self,
        client,
        poll_interval: float = DEFAULT_POLL_INTERVAL,
        max_wait: Optional[float] = DEFAULT_MAX_WAIT,
        output_dir: str = DEFAULT_OUTPUT_DIR,
        sleep: Optional[Callable[[float], None]] = None,
        clock: Optional[Callable[[], float]] = None,
        printer: Callable[[str], None] = print,
    ):
        self.client = client
        self.poll_interval = poll_interval
        self.max_wait = max_wait
        self.output_dir = output_dir
        self._sleep = sleep or time.sleep
        self._clock = clock or time.monotonic
        self._print = printer

    def wait(self, thread_id: str, run_id: str) -> RunOutcome:
        started = self._clock()
        outcome = RunOutcome(run=None)
        last_status = None

        while True:
            elapsed = self._clock() - started
            if self.max_wait is not None and elapsed >= self.max_wait:
                raise RunTimeoutError(run_id, last_status or "unknown", elapsed)

            self._sleep(self.poll_interval)
            run = retrieve_run(self.client, thread_id, run_id)
            outcome.run = run
            outcome.polls += 1
            last_status = run.status
            status = RunStatus.parse(run.status)

            if status is RunStatus.COMPLETED:
                return self._finish(thread_id, outcome)

            if status in FAILED_STATUSES:
                error = _describe_error(getattr(run, "last_error", None))
                logging.error(
                    "[RunMonitor] Run %s ended with status=%s last_error=%s",
                    run_id,
                    run.status,
                    error,
                )
                raise RunFailedError(run_id, run.status, error)

            if status is RunStatus.REQUIRES_ACTION:
                tool_outputs = self.answer_tool_calls(run)
                if tool_outputs:
                    submit_tool_outputs(self.client, thread_id, run_id, tool_outputs)
                    outcome.submissions += 1
                    logging.info(
                        "[RunMonitor] Submitted %d tool output(s) for run %s",
                        len(tool_outputs),
                        run_id,
                    )
                else:
                    logging.warning(
                        "[RunMonitor] Run %s requires action but lists no tool calls",
                        run_id,
                    )
            elif status in WAITING_STATUSES:
                logging.info("[RunMonitor] Run %s is %s", run_id, run.status)
            else:
                logging.warning(
                    "[RunMonitor] Run %s reported unrecognised status %r, still polling",
                    run_id,
                    run.status,
                )

    def answer_tool_calls(self, run) -> list:
        """
        Execute every pending tool call once and build the output batch.
        Calls that cannot be executed get an "error: ..." output so the run
        is never left waiting on a missing id.
        """
        tool_outputs = []
        seen = set()
        for call in pending_tool_calls(run):
            if call.id in seen:
                continue
            seen.add(call.id)

            name = call.function.name
            try:
                output = execute_tool_call(
                    name, call.function.arguments, output_dir=self.output_dir
                )
            except ToolError as e:
                logging.error(
                    "[RunMonitor] Tool call %s (%s) failed: %s", call.id, name, e
                )
                output = f"error: {e}"
            tool_outputs.append({"tool_call_id": call.id, "output": output})
        return tool_outputs

    def _finish(self, thread_id, outcome):
        outcome.messages = list_messages(self.client, thread_id)
        outcome.transcript = format_transcript(outcome.messages)
        for line in outcome.transcript:
            self._print(line)
        logging.info(
            "[RunMonitor] Run %s completed after %d poll(s)",
            outcome.run.id,
            outcome.polls,
        )
        return outcome
