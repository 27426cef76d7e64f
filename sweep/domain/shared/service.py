from abc import ABCMeta
from dataclasses import dataclass
from typing import Any, dataclass_transform


@dataclass_transform()
class DataclassMeta(ABCMeta):
    """Metaclass that turns every subclass of its root class into a dataclass.

    Fields declared on the subclass become constructor arguments, which is how
    the DI container injects dependencies.
    """

    def __new__(mcs, name: str, bases: tuple[type, ...], namespace: dict[str, Any]) -> type:
        cls = super().__new__(mcs, name, bases, namespace)
        if any(isinstance(b, mcs) for b in bases):
            cls = dataclass(cls)
        return cls


class Service(metaclass=DataclassMeta):
    """Base class for domain services. Subclasses are automatically dataclasses."""
