from sweep.domain.auth.util.di.provider import AuthProvider, bearer_token

__all__ = ["AuthProvider", "bearer_token"]
