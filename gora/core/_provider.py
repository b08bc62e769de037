import asyncio
from typing import Any

from ._operation import Operation
from .exceptions import NotSupportedError


class Provider:
    __component__: Any
    __type__: str

    def __init__(self, **kwargs):
        self.__type__ = kwargs.pop("__type__", self.__class__.__module__)
        for key, value in kwargs.items():
            setattr(self, key, value)

    def __setup__(self) -> None:
        pass

    async def __asetup__(self) -> None:
        await asyncio.to_thread(self.__setup__)

    def __run__(
        self,
        operation: Operation,
        **kwargs,
    ) -> Any:
        func = getattr(self, operation.name, None)
        if func is None or not callable(func):
            raise NotSupportedError(str(operation))
        self.__setup__()
        return func(**(operation.args or {}))

    async def __arun__(
        self,
        operation: Operation,
        **kwargs,
    ) -> Any:
        afunc = getattr(self, f"a{operation.name}", None)
        if afunc is not None and callable(afunc):
            await self.__asetup__()
            return await afunc(**(operation.args or {}))
        return await asyncio.to_thread(self.__run__, operation, **kwargs)

    def __supports__(self, feature: str) -> bool:
        func = getattr(self, feature, None)
        return func is not None and callable(func)
