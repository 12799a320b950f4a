from __future__ import annotations

from typing import Any

from clusterwiz.exceptions.base import ClusterWizError


class ConfigError(ClusterWizError):
    """Configuration could not be loaded or validated.

    Raised for YAML parse failures and for pydantic validation errors in
    ``clusterwiz.yaml``, the user config file, or ``CLUSTERWIZ_*`` variables.

    Attributes:
        message: Human-readable error message.
        field: Dotted path of the offending field (e.g. "google.credential_attempts").
        value: The rejected value, if known.

    Example:
        ```python
        raise ConfigError(
            "Invalid configuration: Input should be less than or equal to 20",
            field="google.credential_attempts",
            value=50,
        )
        ```
    """

    def __init__(
        self,
        message: str,
        field: str | None = None,
        value: Any = None,
    ) -> None:
        """Initialize the ConfigError.

        Args:
            message: Human-readable error message.
            field: Optional field name that caused the error.
            value: Optional value that failed validation.
        """
        self.field = field
        self.value = value
        super().__init__(message)
