"""Error kinds raised across the bot.

Dispatch errors are recovered by the bot loop and never outlive one dispatch
cycle. Contract violations and transport errors are fatal to the loop.
"""

from __future__ import annotations


class LinkbotError(Exception):
    """Base class for every error linkbot raises on purpose."""


class DispatchError(LinkbotError):
    """A subscriber could not produce a reply for one message.

    ``target`` is where a diagnostic may be relayed, when one is known.
    """

    def __init__(self, message: str, target: str | None = None):
        super().__init__(message)
        self.message = message
        self.target = target

    def __str__(self) -> str:
        return self.message


class NoReplyTarget(DispatchError):
    def __init__(self, message: str = "Unable to determine reply target."):
        super().__init__(message)


class NoMessageText(DispatchError):
    def __init__(self, message: str = "No message text."):
        super().__init__(message)


class HandlerFailure(DispatchError):
    """One or more handlers failed; ``message`` holds the collated diagnostics."""


class HandlerError(LinkbotError):
    """A single handler invocation failed in a way that may succeed later."""


class HttpError(HandlerError):
    """Base for failures at the HTTP boundary."""


class HttpBadRequest(HttpError):
    def __init__(self, url: str = ""):
        super().__init__("HTTP Bad Request")
        self.url = url


class HttpNotFound(HttpError):
    def __init__(self, url: str = ""):
        super().__init__("HTTP Not Found")
        self.url = url


class HttpStatusError(HttpError):
    def __init__(self, status_code: int, url: str = ""):
        super().__init__(f"HTTP Error ({status_code})")
        self.status_code = status_code
        self.url = url


class HttpConnectionError(HttpError):
    def __init__(self, detail: str = "", url: str = ""):
        super().__init__("Connection failed.")
        self.detail = detail
        self.url = url


class UpstreamContractViolation(LinkbotError):
    """An upstream service answered with a shape the handler cannot read."""

    def __init__(self, service: str, detail: str):
        super().__init__(f"{service}: unexpected response ({detail})")
        self.service = service
        self.detail = detail


class TransportError(LinkbotError):
    """The chat transport failed; the bot loop cannot continue."""


class ConfigMissing(LinkbotError):
    """An optional setting (usually a credential) is not configured."""

    def __init__(self, name: str, detail: str = ""):
        message = f"{name} is not configured"
        if detail:
            message = f"{message} ({detail})"
        super().__init__(message)
        self.name = name
