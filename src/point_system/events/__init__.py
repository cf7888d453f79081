from .publisher import AttendanceEvent, EventPublisher, LoggingEventPublisher

__all__ = ["AttendanceEvent", "EventPublisher", "LoggingEventPublisher"]
