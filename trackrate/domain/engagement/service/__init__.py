from trackrate.domain.engagement.service.ledger import EngagementLedger

__all__ = ["EngagementLedger"]
