"""Exceptions raised while serving price requests.

Every error carries the HTTP status and the (Norwegian) message that is sent
back to the browser as ``{"message": ...}``.
"""


class ElektronError(Exception):
    status_code = 500

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message


class ValidationError(ElektronError):
    status_code = 400


class InvalidNumber(ValidationError):
    pass


class YearOutOfRange(ValidationError):
    pass


class MonthOutOfRange(ValidationError):
    pass


class DayOutOfRange(ValidationError):
    pass


class InvalidRegion(ValidationError):
    pass


class UpstreamUnavailable(ElektronError):
    status_code = 500
