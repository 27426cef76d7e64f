from sweep.util.di.base import Provider
from sweep.util.di.scope import Scope

__all__ = ["Provider", "Scope"]
