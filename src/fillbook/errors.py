"""Failures the fixture run can hit.

Transport errors raised by xrpl-py or websockets are deliberately not wrapped
here; they propagate untouched and end the run.
"""


class FillbookError(RuntimeError):
    pass


class RequestFailed(FillbookError):
    """A request reached rippled and came back with an error status."""

    def __init__(self, command: str, error: str | None, message: str | None = None):
        self.command = command
        self.error = error
        self.message = message
        super().__init__(f"{command} failed: {error}" + (f" ({message})" if message else ""))


class EngineResultError(FillbookError):
    """A submitted transaction was not provisionally applied."""

    def __init__(self, transaction_type: str, engine_result: str | None, engine_result_message: str | None = None):
        self.transaction_type = transaction_type
        self.engine_result = engine_result
        self.engine_result_message = engine_result_message
        super().__init__(f"{transaction_type} rejected: {engine_result} - {engine_result_message}")
