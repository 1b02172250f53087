"""Exceptions raised by the relay's backend and configuration layers."""


class RelayError(Exception):
    default_detail: str = "Relay error"

    def __init__(self, detail: str | None = None) -> None:
        super().__init__(detail or self.default_detail)
        self.detail = detail or self.default_detail


class BackendError(RelayError):
    default_detail = "Text generation backend call failed."


class BackendResponseError(BackendError):
    default_detail = "Text generation backend returned no usable text."


class PromptNotFoundError(RelayError):
    default_detail = "System prompt not found."
