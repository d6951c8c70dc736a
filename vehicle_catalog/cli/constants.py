"""Exit codes shared by CLI commands."""

SUCCESS_EXIT_CODE = 0
FAILURE_EXIT_CODE = 1
NOT_FOUND_EXIT_CODE = 2

__all__ = ["FAILURE_EXIT_CODE", "NOT_FOUND_EXIT_CODE", "SUCCESS_EXIT_CODE"]
