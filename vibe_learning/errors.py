"""Error kinds surfaced to the user as inline messages."""


class VocabError(Exception):
    """Base class: the mutation was refused and prior state is untouched."""

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message


class ValidationError(VocabError):
    """Empty or overlong field, or nothing to work with."""


class DuplicatePair(VocabError):
    """A dictionary already covers this language pair (in either direction)."""


class InvalidPair(VocabError):
    """Identical or unsupported languages."""


class NotFound(VocabError):
    """Unknown dictionary or word id."""


class SessionStateError(VocabError):
    """Quiz operation issued in the wrong phase."""


class ProfileFormatError(VocabError):
    """Stored profile document has the wrong shape."""
