"""Exceptions raised while ingesting a training file."""


class TrainingFileError(ValueError):
    """Base class for fatal ingestion errors. No partial result exists."""

    def __init__(self, message: str, filename: str = ""):
        super().__init__(message)
        self.filename = filename


class UnsupportedFormatError(TrainingFileError):
    """The file extension is not one of the registered formats."""


class MalformedDocumentError(TrainingFileError):
    """The file content could not be parsed as XML at all."""
