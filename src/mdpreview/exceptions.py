#  Copyright (c) 2025 Tom Villani, Ph.D.
#
# src/mdpreview/exceptions.py
"""Exceptions raised by the preview engine.

Most rendering problems never surface here: an element that cannot be drawn
is replaced by a placeholder visual node and logged. The exceptions below
cover invalid options and configuration, parser failures, cancelled render
passes and missing optional libraries.

Exception Hierarchy
-------------------
- MdPreviewError

  - ValidationError (bad argument or option value)
    - InvalidOptionsError (options object of the wrong class)
    - ConfigurationError (unreadable or invalid configuration file)

  - ParsingError (markdown could not be turned into a document tree)

  - RenderingError (visual tree construction failed)
    - RenderCancelledError (render pass abandoned after cancellation)

  - DependencyError (required package missing or too old)

"""

from typing import Any


class MdPreviewError(Exception):
    """Root of every error raised by mdpreview.

    Parameters
    ----------
    message : str
        Human-readable description
    original_error : Exception, optional
        Underlying exception, when this error wraps one

    """

    def __init__(self, message: str, original_error: Exception | None = None):
        """Store the message and the wrapped exception."""
        super().__init__(message)
        self.message = message
        self.original_error = original_error


class ValidationError(MdPreviewError):
    """An argument or option value is outside what the engine accepts.

    Parameters
    ----------
    message : str
        What is wrong with the value
    parameter_name : str, optional
        Name of the offending argument or option field
    parameter_value : any, optional
        The rejected value
    original_error : Exception, optional
        Underlying exception

    """

    def __init__(
        self,
        message: str,
        parameter_name: str | None = None,
        parameter_value: Any = None,
        original_error: Exception | None = None,
    ):
        """Record which parameter was rejected."""
        super().__init__(message, original_error=original_error)
        self.parameter_name = parameter_name
        self.parameter_value = parameter_value


class InvalidOptionsError(ValidationError):
    """A parser or renderer received an options object of the wrong class.

    For example, ``SessionOptions`` passed to the preview renderer.

    Parameters
    ----------
    component_name : str
        Component that rejected the options
    expected_type : type
        Options class the component accepts
    received_type : type
        Options class that was passed
    message : str, optional
        Overrides the generated message

    """

    def __init__(
        self,
        component_name: str,
        expected_type: type,
        received_type: type,
        message: str | None = None,
        original_error: Exception | None = None,
    ):
        """Build a message naming both options classes."""
        if message is None:
            message = (
                f"{component_name} takes {expected_type.__name__}, "
                f"got {received_type.__name__}"
            )
        super().__init__(
            message, parameter_name="options", parameter_value=received_type, original_error=original_error
        )
        self.component_name = component_name
        self.expected_type = expected_type
        self.received_type = received_type


class ConfigurationError(ValidationError):
    """A configuration file cannot be read, decoded or applied.

    Parameters
    ----------
    message : str
        Description of the problem
    config_path : str, optional
        File the problem was found in
    original_error : Exception, optional
        Decode or I/O error that caused it

    """

    def __init__(self, message: str, config_path: str | None = None, original_error: Exception | None = None):
        """Record the offending file."""
        super().__init__(message, parameter_name="config", parameter_value=config_path, original_error=original_error)
        self.config_path = config_path


class ParsingError(MdPreviewError):
    """Markdown source could not be turned into a document tree.

    Parameters
    ----------
    message : str
        Description of the failure
    parsing_stage : str, optional
        Where it happened ("input", "tokenize", "convert")
    original_error : Exception, optional
        Exception raised by the markdown library

    """

    def __init__(self, message: str, parsing_stage: str | None = None, original_error: Exception | None = None):
        """Record the stage that failed."""
        super().__init__(message, original_error)
        self.parsing_stage = parsing_stage


class RenderingError(MdPreviewError):
    """A render pass did not produce a visual tree.

    The builder itself never raises this for content: an element that cannot
    be drawn becomes a placeholder. It is the base of ``RenderCancelledError``
    and the type hosts catch around a whole render pass.

    Parameters
    ----------
    message : str
        Description of the failure
    rendering_stage : str, optional
        Where it happened (e.g. "cancelled")
    original_error : Exception, optional
        Exception raised while rendering the node

    """

    def __init__(
        self,
        message: str,
        rendering_stage: str | None = None,
        original_error: Exception | None = None,
    ):
        """Record the stage that failed."""
        super().__init__(message, original_error)
        self.rendering_stage = rendering_stage


class RenderCancelledError(RenderingError):
    """A render pass stopped because its cancellation token was cancelled.

    The scheduler expects this whenever new text arrives mid-render; it
    catches the error and throws the partial output away.

    Parameters
    ----------
    reason : str, optional
        Why the token was cancelled (e.g. "text changed")

    """

    def __init__(self, reason: str | None = None):
        """Build the message from the cancellation reason."""
        message = f"Render pass was cancelled: {reason}" if reason else "Render pass was cancelled"
        super().__init__(message, rendering_stage="cancelled")
        self.reason = reason


class DependencyError(MdPreviewError):
    """A package needed by a component is missing or too old.

    Parameters
    ----------
    component_name : str
        Component that needs the packages (e.g. "markdown")
    missing_packages : list[tuple[str, str]]
        ``(package_name, version_spec)`` for each package that failed to import
    version_mismatches : list[tuple[str, str, str]], optional
        ``(package_name, required, installed)`` for each outdated package
    install_command : str, optional
        Install hint to show instead of the generated ``pip`` command
    message : str, optional
        Overrides the generated message
    original_import_error : ImportError, optional
        First import failure encountered

    """

    def __init__(
        self,
        component_name: str,
        missing_packages: list[tuple[str, str]],
        version_mismatches: list[tuple[str, str, str]] | None = None,
        install_command: str = "",
        message: str | None = None,
        original_import_error: ImportError | None = None,
    ):
        """Build an install hint from the missing and outdated packages."""
        version_mismatches = version_mismatches or []
        if message is None:
            message = self._build_message(component_name, missing_packages, version_mismatches, install_command)

        super().__init__(message, original_import_error)
        self.component_name = component_name
        self.missing_packages = missing_packages
        self.version_mismatches = version_mismatches
        self.install_command = install_command
        self.original_import_error = original_import_error

    @staticmethod
    def _build_message(
        component_name: str,
        missing_packages: list[tuple[str, str]],
        version_mismatches: list[tuple[str, str, str]],
        install_command: str,
    ) -> str:
        lines = []
        if missing_packages:
            names = ", ".join(f"'{name}{spec}'" for name, spec in missing_packages)
            lines.append(f"{component_name} requires the following packages: {names}")
        if version_mismatches:
            details = ", ".join(
                f"'{name}' (requires {required}, but {installed} is installed)"
                for name, required, installed in version_mismatches
            )
            lines.append(f"{component_name} has version mismatches: {details}")

        if not install_command:
            requirements = missing_packages + [(name, required) for name, required, _ in version_mismatches]
            if requirements:
                install_command = "pip install --upgrade " + " ".join(
                    f'"{name}{spec}"' if spec else name for name, spec in requirements
                )
        if install_command:
            lines.append(f"Install with: {install_command}")
        return "\n".join(lines)
