from ._component import Component
from ._decorators import operation
from ._loader import Loader
from ._operation import Operation
from ._provider import Provider
from ._response import Response
from .config import Configuration
from .data_model import DataModel, FrozenDataModel

__all__ = [
    "Component",
    "Configuration",
    "DataModel",
    "FrozenDataModel",
    "Loader",
    "Operation",
    "Provider",
    "Response",
    "operation",
]
