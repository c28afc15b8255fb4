# Custom exceptions for fixguard

class FixGuardError(Exception):
    """Base exception for all application-specific errors."""
    pass

class PositionError(FixGuardError):
    """Raised when a line/column pair or an offset falls outside the buffer."""
    def __init__(self, message: str, line: int = None, column: int = None, offset: int = None):
        self.line = line
        self.column = column
        self.offset = offset
        self.message = message
        super().__init__(message)

class OperationError(FixGuardError):
    """Raised when an explicit operation cannot be carried out."""
    pass

class SnapshotNotFoundError(OperationError):
    """Raised when a snapshot id has never been recorded."""
    def __init__(self, snapshot_id: str):
        self.snapshot_id = snapshot_id
        super().__init__(f"Snapshot '{snapshot_id}' not found")

class InvalidReplacementBoundsError(OperationError):
    """Raised when a replacement range does not fit inside the buffer."""

    def __init__(self, start: int, end: int, length: int):
        self.start = start
        self.end = end
        self.length = length
        super().__init__(
            f"Invalid replacement bounds [{start}, {end}) for buffer of length {length}"
        )

class RevertError(OperationError):
    """Raised when a recorded fix cannot be reverted."""
    pass

class FixerRegistrationError(FixGuardError):
    """Raised when a fixer cannot be registered."""
    pass

class ConfigError(FixGuardError):
    """Raised for configuration-related problems."""
    pass
