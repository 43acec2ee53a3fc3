"""Domain-specific errors for easytty."""


class EasyTTYError(Exception):
    """Base error for easytty."""


class ConfigLoadError(EasyTTYError):
    """Raised when a configuration file cannot be read."""


class ConfigValidationError(EasyTTYError):
    """Raised when a configuration file does not conform to schema or semantics."""


class DeviceEnumerationError(EasyTTYError):
    """Raised when the udev enumeration facility cannot be initialized."""


class DeviceSelectionError(EasyTTYError):
    """Raised when a device hint cannot be resolved to a single device."""


class RuleValidationError(EasyTTYError):
    """Raised when a symlink name or device is rejected before any I/O."""


class RuleConflictError(EasyTTYError):
    """Raised when a symlink name or device binding is already taken."""


class PersistenceError(EasyTTYError):
    """Raised when a rule file cannot be written or removed."""


class ControlError(EasyTTYError):
    """Raised when a udevadm control command fails."""
