"""Exception hierarchy for the transcription-to-subtitle pipeline."""


class SubbatchError(Exception):
    """Base class for all errors raised while processing a file."""


class ValidationError(SubbatchError):
    """Bad input path, unsupported extension, or missing directory."""


class TranscodeError(SubbatchError):
    """The external audio transcoder failed."""


class TranscriptionServiceError(SubbatchError):
    """Network, authentication, or remote failure from the transcription API."""


class WriteError(SubbatchError):
    """A subtitle file could not be written."""
