from trackrate.domain.activity.model.event import ActivityAction, ActivityEvent, ActivityFilter

__all__ = ["ActivityAction", "ActivityEvent", "ActivityFilter"]
