"""Domain-specific errors for wakectl."""


class WakectlError(Exception):
    """Base error for wakectl."""


class MacParseError(WakectlError, ValueError):
    """Raised when a MAC address string cannot be parsed."""


class MacLengthError(MacParseError):
    """Raised when a cleaned MAC address is not exactly 12 characters."""


class MacHexError(MacParseError):
    """Raised when a MAC address contains non-hex characters."""


class ConfigError(WakectlError):
    """Raised when the configuration file is unreadable or invalid."""


class RegistryError(WakectlError):
    """Raised when the device registry cannot be read or written."""


class DuplicateDeviceError(RegistryError):
    """Raised when adding a device whose name is already registered."""


class DeviceNotFoundError(RegistryError):
    """Raised when a named device is not registered."""


class DeviceSelectionError(WakectlError):
    """Raised when a device hint cannot resolve a single target."""


class TransportError(WakectlError):
    """Base transport error."""


class TransportConnectError(TransportError):
    """Raised when a broadcast sender cannot be set up."""


class TransportSendError(TransportError):
    """Raised when sending the packet fails."""


class TransportTimeoutError(TransportError):
    """Raised when a transport gives up waiting."""
