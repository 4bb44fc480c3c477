from trackrate.domain.engagement.util.di.provider import EngagementProvider

__all__ = ["EngagementProvider"]
