from keepsake.application.use_cases.timeline.timeline_operations import \
    TimelineService

__all__ = ["TimelineService"]
