from dataclasses import dataclass
from typing import dataclass_transform


@dataclass_transform(kw_only_default=True, eq_default=False)
class _ServiceMeta(type):
    """Turns every ``Service`` subclass into a keyword-only dataclass.

    Fields are the collaborators (ports, other services, config sections) that
    the container and the tests wire in by name.
    """

    def __new__(mcs, name: str, bases: tuple, namespace: dict):
        cls = super().__new__(mcs, name, bases, namespace)
        if any(isinstance(b, mcs) for b in bases):
            return dataclass(cls, kw_only=True, eq=False)
        return cls


class Service(metaclass=_ServiceMeta):
    """Base class for domain services: stateless apart from injected collaborators."""
