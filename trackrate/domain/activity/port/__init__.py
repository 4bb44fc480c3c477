from trackrate.domain.activity.port.recorder import ActivityReader, ActivityRecorder

__all__ = ["ActivityReader", "ActivityRecorder"]
