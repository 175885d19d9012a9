from .core.registry import AdapterRegistry, DialectRegistry
from .core.resolver import new_schema_source, parse_source

__all__ = [
    "__version__",
    "AdapterRegistry",
    "DialectRegistry",
    "new_schema_source",
    "parse_source",
]

__version__ = "0.1.0"
