"""Domain errors and failure typing."""


class PipelineError(Exception):
    """Base class for pipeline failures."""

    error_code = "PIPELINE_ERROR"


class UsageError(PipelineError):
    """Raised when required command line arguments are missing."""

    error_code = "USAGE_ERROR"


class ConfigError(PipelineError):
    """Raised for invalid or missing configuration."""

    error_code = "CONFIG_ERROR"


class SourceReadError(PipelineError):
    """Raised when an input file cannot be opened or decoded."""

    error_code = "IO_ERROR"


class SchemaError(PipelineError):
    """Raised when a registry row does not fit the fixed column layout."""

    error_code = "SCHEMA_ERROR"


class MissingFieldError(PipelineError, KeyError):
    """Raised when a record is asked for a field outside its schema."""

    error_code = "MISSING_FIELD"

    def __str__(self) -> str:
        # KeyError quotes its argument; keep the plain message.
        return Exception.__str__(self)
