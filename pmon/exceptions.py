"""Custom exceptions for pmon."""


class PmonError(Exception):
    """Base exception for all pmon errors."""


class DetectionError(PmonError):
    """Raised when a directory cannot be classified or its manifest cannot be read."""


class UnsupportedTypeError(PmonError):
    """Raised when analysis is requested for a project type with no metrics provider."""

    def __init__(self, project_type: str):
        self.project_type = project_type
        super().__init__(f"unsupported project type: {project_type}")


class UnsupportedFormatError(PmonError):
    """Raised when a report is requested in an unknown output format."""

    def __init__(self, output_format: str):
        self.output_format = output_format
        super().__init__(f"unsupported output format: {output_format}")


class ReportWriteError(PmonError):
    """Raised when a report file cannot be created or written."""


class ConfigError(PmonError):
    """Raised when a configuration value is invalid."""
