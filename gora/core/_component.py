from __future__ import annotations

from typing import Any

from ._operation import Operation
from ._provider import Provider
from ._response import Response


class Component:
    __provider__: Provider
    __type__: str
    __unpack__: bool

    def __init__(
        self,
        **kwargs,
    ):
        self.__unpack__ = kwargs.pop("__unpack__", False)
        self.__type__ = kwargs.pop("__type__", self.__class__.__module__)
        if "__provider__" in kwargs:
            self.__bind__(kwargs.pop("__provider__"))

    def __bind__(
        self,
        provider: Provider | dict | str | None,
    ) -> None:
        if provider is None:
            return
        if isinstance(provider, Provider):
            provider.__component__ = self
            self.__provider__ = provider
            return
        if isinstance(provider, dict):
            provider = dict(provider)
            type = provider.pop("type")
            parameters = provider.pop("parameters", dict())
        else:
            type = provider
            parameters = dict()
        from ._loader import Loader

        module_name = self.__class__.__module__.rsplit(".", 1)[0]
        provider_instance = Loader.load_provider_instance(
            path=f"{module_name}.providers.{type}",
            parameters=parameters,
        )
        self.__bind__(provider=provider_instance)

    def __setup__(self) -> None:
        self.__provider__.__setup__()

    async def __asetup__(self) -> None:
        await self.__provider__.__asetup__()

    def __run__(
        self,
        operation: Operation,
        **kwargs,
    ) -> Any:
        response = self.__provider__.__run__(operation=operation, **kwargs)
        return self._unpack(response)

    async def __arun__(
        self,
        operation: Operation,
        **kwargs,
    ) -> Any:
        response = await self.__provider__.__arun__(
            operation=operation, **kwargs
        )
        return self._unpack(response)

    def __supports__(self, feature: str) -> bool:
        return self.__provider__.__supports__(feature)

    def _unpack(self, response: Any) -> Any:
        if self.__unpack__ and isinstance(response, Response):
            return response.result
        return response
