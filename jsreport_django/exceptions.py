"""
Exceptions raised by the jsreport response filter.

These exceptions provide a unified way to handle configuration and
remote rendering failures.

Design principles:
- Never include credentials in exception messages
- Map HTTP status codes consistently
- Distinguish between temporary and permanent failures
"""


class JsReportError(Exception):
    """
    Base exception for all jsreport-related errors.
    
    Every error raised by this package inherits from this class, allowing
    consumers to catch all of them with a single except clause.
    """
    pass


class ServiceNotConfigured(JsReportError):
    """
    Raised when the reporting service is used but its configuration is incomplete.
    
    Example:
        If the JSREPORT setting has no URL.
    """
    pass


class ServiceDisabled(JsReportError):
    """
    Raised when attempting to use a reporting service that is explicitly disabled.
    
    Example:
        If JSREPORT['ENABLED'] is False.
    """
    pass


class ReportingError(JsReportError):
    """
    Base exception for failures of the remote rendering call.
    """
    
    def __init__(self, message, status_code=None):
        """
        Initialize reporting error.
        
        Args:
            message: Error message (no credentials!)
            status_code: Optional HTTP status returned by the server
        """
        super().__init__(message)
        self.status_code = status_code


class ReportingAuthError(ReportingError):
    """
    Raised when authentication with the jsreport server fails.
    
    Corresponds to HTTP 401/403 errors.
    """
    pass


class ReportingTemporaryError(ReportingError):
    """
    Raised for errors that may succeed if the request is made again later.
    
    Typically corresponds to:
    - HTTP 5xx server errors
    - Network timeouts
    - Connection errors
    
    The filter itself never retries.
    """
    pass


class ReportingPermanentError(ReportingError):
    """
    Raised for HTTP 4xx client errors (other than 401/403).
    
    These indicate an invalid render request, e.g. an unknown recipe
    or engine.
    """
    pass


class TemplateRenderError(JsReportError):
    """
    Raised when a configured header or footer template cannot be rendered.
    
    Attributes:
        template_name: Name of the template that failed
    """
    
    def __init__(self, message, template_name=None):
        super().__init__(message)
        self.template_name = template_name
