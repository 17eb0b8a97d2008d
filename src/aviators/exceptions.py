# Custom exceptions for aviators

class AviatorsError(Exception):
    """Base exception for all application-specific errors."""
    category = "error"


class ArgumentError(AviatorsError):
    """Raised for a missing positional argument or a name that breaks its kind's convention."""
    category = "argument"


class ExistenceConflict(AviatorsError):
    """Raised when the artifact, role, module, page or identifier already exists."""
    category = "exists"

    def __init__(self, target: str, message: str = ""):
        self.target = target
        super().__init__(message or f"Already exists → {target}")


class TargetNotFound(AviatorsError):
    """Raised when a path that must exist is absent."""
    category = "not-found"

    def __init__(self, target: str, message: str = ""):
        self.target = target
        super().__init__(message or f"Not found → {target}")


class AnchorNotFound(AviatorsError):
    """
    Raised when a marker or structural pattern is missing from a registry file.

    Signals drift between the file's actual shape and the dialect the
    mutator assumes.
    """
    category = "anchor"

    def __init__(self, file_path: str, anchor: str):
        self.file_path = file_path
        self.anchor = anchor
        super().__init__(f"Marker not found in {file_path}: {anchor}")


class ConfigError(AviatorsError):
    """Raised for configuration-related problems."""
    category = "config"


class RecoveryError(AviatorsError):
    """Raised when a pending intent cannot be recovered."""
    category = "recovery"
