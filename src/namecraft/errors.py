"""Error taxonomy for namecraft.

Every operation raises one of these (or a plain ``OSError`` for filesystem
failures surfaced verbatim). The CLI layer converts them to a message string
at the command boundary; nothing below it catches and rewords errors.

Design:
- NotFoundError and AlreadyExistsError also subclass the matching builtin
  ``OSError`` subclasses, so callers that already handle ``FileNotFoundError``
  or ``FileExistsError`` keep working.
"""


class NamecraftError(Exception):
    """Base exception for all namecraft errors."""


class NotFoundError(NamecraftError, FileNotFoundError):
    """Raised when a target path (or launcher application) does not exist."""


class AlreadyExistsError(NamecraftError, FileExistsError):
    """Raised when a rename target is already occupied."""


class ExhaustedError(NamecraftError):
    """Raised when a suffix or temp-name search runs out of candidates."""


class EncodeError(NamecraftError):
    """Raised when a thumbnail cannot be compressed."""


class LaunchError(NamecraftError):
    """Raised when an external process could not be started."""


__all__ = [
    "NamecraftError",
    "NotFoundError",
    "AlreadyExistsError",
    "ExhaustedError",
    "EncodeError",
    "LaunchError",
]
