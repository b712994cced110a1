"""
Exit codes and error types for repomirror.

Following Unix/POSIX conventions for command-line tools. Library errors
carry the exit code the CLI should terminate with.
"""
from typing import Optional

# Standard POSIX exit codes
SUCCESS = 0              # Successful termination
GENERAL_ERROR = 1        # General errors
USAGE_ERROR = 2          # Misuse of shell command (wrong arguments, etc.)

# Application-specific exit codes (64-113 are typically available)
NOT_FOUND = 64           # Mirror, remote or file could not be found/read
CONFIG_ERROR = 66        # Configuration file error
PERMISSION_ERROR = 67    # Insufficient permissions
NETWORK_ERROR = 68       # Network connection failed
DATA_ERROR = 70          # Data format or validation error
INTERRUPTED = 130        # Terminated by Ctrl+C (SIGINT)

# Exit code mappings for common exceptions
EXCEPTION_EXIT_CODES = {
    'FileNotFoundError': GENERAL_ERROR,
    'PermissionError': PERMISSION_ERROR,
    'ConnectionError': NETWORK_ERROR,
    'TimeoutError': NETWORK_ERROR,
    'ValueError': DATA_ERROR,
    'KeyError': DATA_ERROR,
    'JSONDecodeError': DATA_ERROR,
    'ConfigError': CONFIG_ERROR,
    'KeyboardInterrupt': INTERRUPTED,
}


def get_exit_code_for_exception(exc: BaseException) -> int:
    """
    Get the appropriate exit code for an exception.

    Args:
        exc: The exception that occurred

    Returns:
        Appropriate exit code
    """
    exit_code = getattr(exc, 'exit_code', None)
    if isinstance(exit_code, int):
        return exit_code
    return EXCEPTION_EXIT_CODES.get(exc.__class__.__name__, GENERAL_ERROR)


class CommandError(Exception):
    """
    Exception that commands can raise to indicate specific exit codes.
    """
    def __init__(self, message: str, exit_code: int = GENERAL_ERROR):
        super().__init__(message)
        self.exit_code = exit_code


class ConfigError(CommandError):
    """Raised when there's a configuration error."""
    def __init__(self, message: str):
        super().__init__(message, CONFIG_ERROR)


class MirrorError(CommandError):
    """Base class for errors raised by the mirror and file objects."""


class InvalidArgument(MirrorError):
    """An identity field contains a disallowed character, or a value is out of range."""
    def __init__(self, message: str = "Invalid argument"):
        super().__init__(message, DATA_ERROR)


class InvalidProtocol(MirrorError):
    """The transport protocol is neither SSH nor HTTPS."""
    def __init__(self, message: str = "Invalid protocol"):
        super().__init__(message, USAGE_ERROR)


class NotFound(MirrorError):
    """
    A remote could not be cloned or updated, or a file could not be read.

    For git failures the message is the command's combined output.
    """
    def __init__(self, message: Optional[str] = None):
        super().__init__(message or "Not found", NOT_FOUND)
