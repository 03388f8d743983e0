# Infrastructure Event Log Adapters Package
from .file_log import FileEventLog
from .memory_log import InMemoryEventLog

__all__ = ["FileEventLog", "InMemoryEventLog"]
