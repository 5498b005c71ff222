"""Faults raised by the geofilter pipeline."""


class GeofilterError(Exception):
    """Base class for pipeline faults."""


class ParseFault(GeofilterError):
    """A non-blank input line is not a JSON object. Nothing is returned for the file."""

    def __init__(self, line_number: int, reason: str):
        self.line_number = line_number
        self.reason = reason
        super().__init__(f"line {line_number}: {reason}")


class UnexpectedFault(GeofilterError):
    """Any other failure while processing a file (I/O, internal errors).

    The message is for operators; callers should only see a generic error.
    """
