"""
e-Gov Law API error hierarchy.

Distinguishes recoverable from permanent errors.
Every failure aborts the current call; nothing is retried locally.
"""
from datetime import datetime
from typing import Any, Optional, Union


class ElawsError(Exception):
    """Base class for e-Gov Law API client errors."""

    def __init__(self, message: str, recoverable: bool = False):
        super().__init__(message)
        self.recoverable = recoverable


class ElawsInvalidParameterError(ElawsError, ValueError):
    """Caller supplied a parameter the API cannot accept."""

    def __init__(self, message: str):
        super().__init__(message, recoverable=False)


class ElawsDateRangeError(ElawsInvalidParameterError):
    """Update date outside the range the API serves."""

    def __init__(self, message: str, date: Optional[datetime] = None):
        super().__init__(message)
        self.date = date


class ElawsDateTooEarlyError(ElawsDateRangeError):
    """Update date before 2020-11-24 (JST)."""

    def __init__(self, date: Optional[datetime] = None):
        super().__init__("指定可能な年月日は 2020 年 11 月 24 日以降です。", date=date)


class ElawsFutureDateError(ElawsDateRangeError):
    """Update date in the future."""

    def __init__(self, date: Optional[datetime] = None):
        super().__init__("未来の日付は指定できません。", date=date)


class ElawsTransportError(ElawsError):
    """
    HTTP round trip did not succeed.

    response is the raw failed response, or None when no response arrived
    (connection error, timeout).
    """

    def __init__(
        self,
        message: str,
        response: Any = None,
        status_code: int = 0,
        url: str = "",
    ):
        super().__init__(message, recoverable=True)
        self.response = response
        self.status_code = status_code
        self.url = url


class ElawsXMLParseError(ElawsError):
    """Response body is not well-formed XML."""

    def __init__(self, message: str, parser_error: Optional[Exception] = None, xml_sample: Union[str, bytes] = ""):
        super().__init__(message, recoverable=False)
        self.parser_error = parser_error
        if isinstance(xml_sample, bytes):
            xml_sample = xml_sample.decode("utf-8", errors="replace")
        self.xml_sample = xml_sample[:500] if xml_sample else ""


class ElawsApiError(ElawsError):
    """
    Envelope status code rejected for the requested operation.

    str(error) is the envelope message.
    """

    def __init__(self, message: str, code: Any = None):
        super().__init__(message, recoverable=False)
        self.code = code
        self.message = message


class ElawsDecodeError(ElawsError):
    """A required element is missing or malformed in an accepted payload."""

    def __init__(self, message: str, tag: str = "", parent: str = ""):
        super().__init__(message, recoverable=False)
        self.tag = tag
        self.parent = parent
