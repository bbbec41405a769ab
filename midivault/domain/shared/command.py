"""Command and CommandHandler base classes with authorization gate."""

from abc import ABCMeta, abstractmethod
from dataclasses import dataclass
from typing import Any, ClassVar, Generic, TypeVar, dataclass_transform

from pydantic import BaseModel, ConfigDict

from midivault.domain.shared.authorization.gate import Gate
from midivault.domain.shared.authorization.guarded import wrap_run_with_gate


class Command(BaseModel):
    model_config = ConfigDict(arbitrary_types_allowed=True)


class Result(BaseModel): ...


C = TypeVar("C", bound=Command)
R = TypeVar("R", bound=Result)


@dataclass_transform()
class _CommandHandlerMeta(ABCMeta):
    """Metaclass that combines ABC with auto-dataclass and __auth__ gate for subclasses."""

    def __new__(mcs, name: str, bases: tuple[type, ...], namespace: dict[str, Any]):
        cls = super().__new__(mcs, name, bases, namespace)
        if any(isinstance(b, mcs) for b in bases):
            cls = dataclass(cls)

            original_run = cls.__dict__.get("run")
            if original_run is not None:
                cls.run = wrap_run_with_gate(cls, original_run)

        return cls


class CommandHandler(Generic[C, R], metaclass=_CommandHandlerMeta):
    """Base class for command handlers. Subclasses are automatically dataclasses.

    Declare __auth__ to choose the gate:
        class MyHandler(CommandHandler[MyCmd, MyResult]):
            __auth__ = authenticated()
            identity_provider: IdentityProvider
            principal: Identity | None = field(default=None, init=False)
    """

    __auth__: ClassVar[Gate]

    @abstractmethod
    async def run(self, cmd: C) -> R: ...
