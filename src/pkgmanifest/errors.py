class ManifestError(Exception):
    """Base class for manifest editor errors."""


class ManifestLoadError(ManifestError):
    """Raised when a manifest file cannot be decoded."""


class ManifestWriteError(ManifestError):
    """Raised when a manifest cannot be written to its path."""


class SessionStateError(ManifestError):
    """Raised when a session operation is invalid in the current state."""


class SettingsError(ManifestError):
    """Raised when the editor settings file is malformed."""
