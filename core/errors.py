from __future__ import annotations


class ExchError(Exception):
    def __init__(self, message: str, type_: str | None = None, details: dict | None = None):
        self.type = type_ or self.__class__.__name__
        self.message = message
        self.details = details or {}
        super().__init__(message)

    def to_dict(self) -> dict:
        return {"type": self.type, "message": self.message, "details": self.details}

class ConfigurationError(ExchError):
    def __init__(self, message: str, **details):
        super().__init__(message, details=details)

class RateLimitExceeded(ExchError):
    def __init__(self, path: str | None = None):
        details = {"path": path} if path else {}
        super().__init__("rate limit exceeded, please wait", details=details)

class InvalidRequest(ExchError):
    def __init__(self, message: str):
        super().__init__(message)

class TransportError(ExchError):
    def __init__(self, path: str, reason: str):
        super().__init__(f"request error on {path}: {reason}", details={"path": path})

class UpstreamStatusError(ExchError):
    def __init__(self, status_code: int, body: str = ""):
        self.status_code = status_code
        self.body = body
        super().__init__(f"error: status {status_code}, response: {body}", details={"status_code": status_code})

class DecodeError(ExchError):
    def __init__(self, path: str, reason: str):
        super().__init__(f"unmarshal error on {path}: {reason}", details={"path": path})
