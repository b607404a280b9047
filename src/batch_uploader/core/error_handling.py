# src/batch_uploader/core/error_handling.py

from typing import Any, Dict, List, Optional

from .logging_config import get_logger
from .protocols import LoggerProtocol


class BatchOperationContextManager:
    """
    Context manager for batch operations to collect and summarize errors.
    """
    def __init__(self, operation_name: str = "Batch Operation", logger: Optional[LoggerProtocol] = None):
        self.operation_name = operation_name
        self.errors: List[Dict[str, str]] = []
        self.logger = logger or get_logger("batch")

    def __enter__(self) -> "BatchOperationContextManager":
        self.logger.info(f"Starting {self.operation_name}.")
        return self

    def __exit__(self, exc_type: Any, exc_val: Any, exc_tb: Any) -> bool:
        if exc_type:
            self.logger.error(
                f"{self.operation_name} failed due to an unhandled exception: {exc_val}"
            )
        elif self.errors:
            self.logger.warning(
                f"{self.operation_name} completed with {len(self.errors)} error(s)."
            )
            for i, error_detail in enumerate(self.errors):
                self.logger.warning(
                    f"  Error {i+1}/{len(self.errors)} for item '{error_detail['item']}': {error_detail['error']}"
                )
        else:
            self.logger.info(f"{self.operation_name} completed successfully.")

        # Exceptions always propagate
        return False

    def add_error(self, error_message: str, item_identifier: str = "Unknown item") -> None:
        """
        Report an error for a specific item.

        Args:
            error_message: The error message or exception string.
            item_identifier: A string identifying the item that failed (e.g. position and filename).
        """
        self.errors.append({"item": item_identifier, "error": str(error_message)})
        self.logger.debug(f"Error added for item '{item_identifier}' in {self.operation_name}: {error_message}")
