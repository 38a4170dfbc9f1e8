#  Copyright (c) 2025 Tom Villani, Ph.D.
"""Custom exceptions for the wherewolf library.

This module defines specialized exception classes for the error conditions
that can occur while building, running and applying searches. These
exceptions carry more specific error information than generic built-ins.

Exception Hierarchy
-------------------
- WherewolfError (base exception)

  - ValidationError (parameter/option validation)
    - EmptyPatternError (no search pattern supplied)
    - InvalidFlagError (denylisted ripgrep flag)

  - DependencyError (missing external tools)
    - ToolNotFoundError (ripgrep executable not found)

  - SearchProcessError (external process failures)
    - ProcessSpawnError (OS refused to start the process)
    - ProcessFailure (process exited with an error status)

  - FileError (file access and I/O)
    - FileAccessError (read/write failures during replacement)

Cancellation of a running search is deliberately absent from this hierarchy:
a cancelled run is silent and never reported as an error.

"""

from typing import Any


class WherewolfError(Exception):
    """Base exception class for all wherewolf-specific errors.

    Parameters
    ----------
    message : str
        Human-readable description of the error
    original_error : Exception, optional
        The original exception that caused this error, if applicable

    Attributes
    ----------
    message : str
        The error message
    original_error : Exception or None
        The wrapped original exception, if any

    """

    def __init__(self, message: str, original_error: Exception | None = None):
        """Initialize the error with a message and optional original exception."""
        super().__init__(message)
        self.message = message
        self.original_error = original_error


class ValidationError(WherewolfError):
    """Exception raised for invalid input parameters or options.

    Parameters
    ----------
    message : str
        Description of the validation error
    parameter_name : str, optional
        Name of the invalid parameter
    parameter_value : any, optional
        The invalid value that was provided
    original_error : Exception, optional
        The original exception that caused this error

    """

    def __init__(
        self,
        message: str,
        parameter_name: str | None = None,
        parameter_value: Any = None,
        original_error: Exception | None = None,
    ):
        """Initialize the validation error with parameter details."""
        super().__init__(message, original_error=original_error)
        self.parameter_name = parameter_name
        self.parameter_value = parameter_value


class EmptyPatternError(ValidationError):
    """Exception raised when a search is requested without a pattern."""

    def __init__(self, message: str | None = None, parameter_value: Any = None):
        """Initialize the empty pattern error."""
        super().__init__(
            message or "Empty search pattern",
            parameter_name="pattern",
            parameter_value=parameter_value,
        )


class InvalidFlagError(ValidationError):
    """Exception raised when a flag would break the vimgrep output format.

    Parameters
    ----------
    flag : str
        The rejected flag as supplied by the caller
    message : str, optional
        Custom error message. If not provided, names the rejected flag

    Attributes
    ----------
    flag : str
        The rejected flag

    """

    def __init__(self, flag: str, message: str | None = None):
        """Initialize the invalid flag error."""
        if message is None:
            message = f"Blacklisted ripgrep flag: {flag}"
        super().__init__(message, parameter_name="flags", parameter_value=flag)
        self.flag = flag


class DependencyError(WherewolfError):
    """Exception raised when a required external tool is unavailable.

    Parameters
    ----------
    tool_name : str
        Name of the tool that is missing
    message : str, optional
        Custom error message
    install_hint : str, optional
        Short instruction for installing the tool
    original_error : Exception, optional
        The original exception that caused this error

    """

    def __init__(
        self,
        tool_name: str,
        message: str | None = None,
        install_hint: str | None = None,
        original_error: Exception | None = None,
    ):
        """Initialize the dependency error."""
        if message is None:
            message = f"'{tool_name}' is required but was not found"
            if install_hint:
                message += f". {install_hint}"
        super().__init__(message, original_error=original_error)
        self.tool_name = tool_name
        self.install_hint = install_hint


class ToolNotFoundError(DependencyError):
    """Exception raised when the ripgrep executable cannot be located."""

    def __init__(self, executable: str = "rg", original_error: Exception | None = None):
        """Initialize the tool-not-found error."""
        super().__init__(
            executable,
            message="ripgrep not found. Please install ripgrep.",
            install_hint="See https://github.com/BurntSushi/ripgrep#installation",
            original_error=original_error,
        )
        self.executable = executable


class SearchProcessError(WherewolfError):
    """Base exception for failures of the external search process."""


class ProcessSpawnError(SearchProcessError):
    """Exception raised when the operating system fails to start ripgrep.

    Parameters
    ----------
    command : list[str]
        The command that could not be started
    original_error : Exception, optional
        The OS-level error

    """

    def __init__(self, command: list[str], original_error: Exception | None = None):
        """Initialize the spawn error."""
        message = "Failed to start ripgrep"
        if original_error is not None:
            message += f": {original_error}"
        super().__init__(message, original_error=original_error)
        self.command = list(command)


class ProcessFailure(SearchProcessError):
    """Exception describing a search run that exited with an error status.

    Parameters
    ----------
    exit_code : int
        Exit status reported by the process
    stderr : str
        Accumulated standard-error text of the run

    Attributes
    ----------
    exit_code : int
        The exit status
    stderr : str
        Diagnostic output of the process

    """

    def __init__(self, exit_code: int, stderr: str = ""):
        """Initialize the process failure."""
        message = f"ripgrep error: {stderr}" if stderr else f"ripgrep exited with status {exit_code}"
        super().__init__(message)
        self.exit_code = exit_code
        self.stderr = stderr


class FileError(WherewolfError):
    """Base exception for file access and I/O errors.

    Parameters
    ----------
    message : str
        Description of the file error
    file_path : str, optional
        Path to the problematic file
    original_error : Exception, optional
        The original exception that caused this error

    """

    def __init__(self, message: str, file_path: str | None = None, original_error: Exception | None = None):
        """Initialize the file error with path and message."""
        super().__init__(message, original_error=original_error)
        self.file_path = file_path


class FileAccessError(FileError):
    """Exception raised when a file cannot be read or written.

    Parameters
    ----------
    file_path : str
        Path to the file that cannot be accessed
    message : str, optional
        Custom error message. If not provided, uses default message
    original_error : Exception, optional
        The original exception that caused this error

    """

    def __init__(self, file_path: str, message: str | None = None, original_error: Exception | None = None):
        """Initialize the file access error."""
        if message is None:
            message = f"Cannot access file: {file_path}"
        super().__init__(message, file_path=file_path, original_error=original_error)
