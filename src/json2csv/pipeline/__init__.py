from . import types
from . import mapping
from . import loader
from . import params
from . import expand
from . import emit

__all__ = [
    "types",
    "mapping",
    "loader",
    "params",
    "expand",
    "emit",
]
