from trackrate.domain.activity.service.activity import ActivityLog

__all__ = ["ActivityLog"]
