from __future__ import annotations


class ClusterWizError(Exception):
    """Base exception class for all clusterwiz errors.

    Adapter operations never raise for CLI failures; they return ``Failed``
    values instead. This hierarchy covers the code that does raise, namely
    configuration loading and the command runner, so the CLI can catch every
    clusterwiz-specific error at its boundary while letting system
    exceptions propagate.

    Attributes:
        message: Human-readable error message describing what went wrong.

    Example:
        ```python
        try:
            config = load_config(path)
        except ClusterWizError as e:
            click.echo(f"Error: {e.message}", err=True)
            sys.exit(1)
        ```
    """

    def __init__(self, message: str) -> None:
        """Initialize the ClusterWizError.

        Args:
            message: Human-readable error message.
        """
        self.message = message
        super().__init__(message)
