"""
Custom formatters for iotconn logging.
"""

import logging


class IotConnFormatter(logging.Formatter):
    """
    Formatter for iotconn log entries.

    Builds its format string from optional timestamp, thread and
    process components. Validation records carry their event metadata
    in ``extra`` and get it appended as ``key=value`` pairs.
    """

    EVENT_ATTRIBUTES = ("validation_kind", "validation_success", "resolved_method")

    def __init__(
        self,
        include_timestamps: bool = True,
        include_thread_info: bool = False,
        include_process_info: bool = False,
    ):
        self.include_timestamps = include_timestamps
        self.include_thread_info = include_thread_info
        self.include_process_info = include_process_info
        fmt_parts = []
        if include_timestamps:
            fmt_parts.append("%(asctime)s")
        fmt_parts.extend(["%(levelname)s", "[%(name)s]", "%(message)s"])
        if include_thread_info:
            fmt_parts.insert(-1, "[Thread:%(thread)d]")
        if include_process_info:
            fmt_parts.insert(-1, "[PID:%(process)d]")
        fmt_string = " ".join(fmt_parts)
        super().__init__(fmt=fmt_string, datefmt="%Y-%m-%d %H:%M:%S")

    def format(self, record: logging.LogRecord) -> str:
        message = super().format(record)
        event_parts = [
            f"{name}={getattr(record, name)}"
            for name in self.EVENT_ATTRIBUTES
            if hasattr(record, name)
        ]
        if event_parts:
            message = f"{message} ({', '.join(event_parts)})"
        return message
