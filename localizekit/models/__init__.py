"""Domain models for the localization table toolkit."""

from .documents import LangJsonInput, LocaleDocument, ParseResult, TableData
from .errors import ErrorKind, ErrorLocation, ParseError
from .flat_entry import FlatEntry
from .header_info import HeaderInfo
from .options import OutputFormat, ParseOptions

__all__ = [
    # Errors
    "ErrorKind",
    "ErrorLocation",
    "ParseError",
    # Parsing
    "FlatEntry",
    "HeaderInfo",
    "OutputFormat",
    "ParseOptions",
    # Documents
    "LangJsonInput",
    "LocaleDocument",
    "ParseResult",
    "TableData",
]
