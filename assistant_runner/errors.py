class AssistantRunnerError(Exception):
    """Base class for every error raised by assistant_runner."""


class ConfigurationError(AssistantRunnerError):
    pass


class RunFailedError(AssistantRunnerError):
    """The run reached a terminal status other than completed."""

    def __init__(self, run_id, status, last_error=None):
        self.run_id = run_id
        self.status = status
        self.last_error = last_error
        message = f"Run {run_id} ended with status {status}"
        if last_error:
            message += f": {last_error}"
        super().__init__(message)


class RunTimeoutError(AssistantRunnerError):
    def __init__(self, run_id, status, elapsed):
        self.run_id = run_id
        self.status = status
        self.elapsed = elapsed
        super().__init__(
            f"Run {run_id} still {status} after {elapsed:.1f}s, giving up"
        )


class ToolError(AssistantRunnerError):
    """A tool call could not be executed. Reported back to the run as output."""


class UnknownToolError(ToolError):
    def __init__(self, name):
        self.name = name
        super().__init__(f"unknown tool function {name!r}")


class ToolArgumentsError(ToolError):
    pass


class InvalidFilenameError(ToolError):
    def __init__(self, filename, reason):
        self.filename = filename
        super().__init__(f"invalid filename {filename!r}: {reason}")


class ToolExecutionError(ToolError):
    def __init__(self, filename, cause):
        self.filename = filename
        super().__init__(f"failed to write {filename!r}: {cause}")
