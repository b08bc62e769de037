from __future__ import annotations

from typing import Any

from .data_model import DataModel


class Operation(DataModel):
    """Operation.

    Attributes:
        name: Operation name.
        args: Operation arguments.
    """

    name: str
    args: dict[str, Any] | None = None

    @staticmethod
    def normalize(
        name: str,
        args: dict[str, Any] | None,
    ) -> Operation:
        if args is None:
            return Operation(name=name)
        rargs: dict = {}
        for k, v in args.items():
            if k == "self":
                continue
            if k == "kwargs":
                rargs.update(v)
            elif v is not None:
                rargs[k] = v
        return Operation(name=name, args=rargs)

    def __str__(self) -> str:
        if not self.args:
            return self.name
        args = ", ".join(f"{k}={v!r}" for k, v in self.args.items())
        return f"{self.name}({args})"
