from dishka import Provider as _DishkaProvider

from sweep.util.di.scope import Scope


class Provider(_DishkaProvider):
    """Base for Sweep DI providers.

    Factories declared without an explicit scope live for the whole
    application. Request-bound dependencies must ask for ``Scope.UOW``.
    """

    scope = Scope.APP
