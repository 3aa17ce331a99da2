from sapf.types.span import TextSpan
from sapf.types.function_entry import FunctionEntry
from sapf.types.catalog import Catalog

__all__ = ["TextSpan", "FunctionEntry", "Catalog"]
