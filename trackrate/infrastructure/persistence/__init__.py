from trackrate.infrastructure.persistence.di import PersistenceProvider

__all__ = ["PersistenceProvider"]
