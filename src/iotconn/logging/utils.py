"""
Utility functions for iotconn logging.
"""

from pathlib import Path
from datetime import datetime, timedelta
from iotconn.constants import LOG_FILE_NAME


def cleanup_old_logs(log_directory: Path, retention_days: int = 30) -> int:
    """
    Clean up old log files based on retention policy.

    Args:
        log_directory: Directory containing log files
        retention_days: Number of days to retain logs

    Returns:
        int: Number of files cleaned up
    """
    if not log_directory.exists():
        return 0

    cutoff_date = datetime.now() - timedelta(days=retention_days)
    cleaned_count = 0

    # Rotated files look like iotconn.log.2024-01-01
    for log_file in log_directory.glob(f"{LOG_FILE_NAME}.log.*"):
        try:
            if log_file.stat().st_mtime < cutoff_date.timestamp():
                log_file.unlink()
                cleaned_count += 1
        except (OSError, ValueError):
            continue

    return cleaned_count


def get_log_directory() -> Path:
    """Get the log directory path (imported from config for convenience)."""
    from .config import get_log_directory as _get_log_directory
    return _get_log_directory()
