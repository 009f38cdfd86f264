"""
Exceptions raised while turning an uploaded file into a dataset.

A mapping that is not ready yet is not an error: the mapper returns ``None``.
"""


class ChartViewerError(Exception):
    """Base exception for the chart viewer."""
    pass


class UnsupportedFormat(ChartViewerError):
    """Raised when a file extension has no parser."""

    def __init__(self, extension):
        self.extension = extension
        super().__init__(f"Unsupported file type: {extension or '(none)'}")


class ParseFailure(ChartViewerError):
    """Raised when a parser fails or yields no flat records."""
    pass
