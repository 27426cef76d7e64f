from sweep.infrastructure.persistence.di import PersistenceProvider

__all__ = ["PersistenceProvider"]
