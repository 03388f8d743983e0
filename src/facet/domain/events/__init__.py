# Domain Events Package
from .models import ReviewEvent, sort_chronologically
from .ports import EventLog

__all__ = ["ReviewEvent", "EventLog", "sort_chronologically"]
