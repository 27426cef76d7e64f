from sweep.domain.cleanup.util.di.provider import CleanupProvider

__all__ = ["CleanupProvider"]
