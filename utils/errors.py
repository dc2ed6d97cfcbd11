"""Structured error types for the website audit system."""

class AuditError(Exception):
    """Base exception for audit errors."""
    pass

class ValidationError(AuditError):
    """Error for invalid input (missing or empty URL)."""
    pass

class SessionError(AuditError):
    """The headless browser could not be launched."""
    pass

class FetchError(AuditError):
    """Error while fetching the target page for a probe."""
    def __init__(self, url: str, message: str):
        self.url = url
        self.message = message
        super().__init__(message)

class AnalysisEngineError(AuditError):
    """Error raised by the external page-analysis engine (Lighthouse)."""
    pass


class AuditFailure(AuditError):
    """Top-level failure of an audit run, carrying the underlying message."""
    def __init__(self, detail: str):
        self.detail = detail
        super().__init__(f"Audit failed: {detail}")
