"""Output formatters for transition matrices."""

from .base import BaseFormatter
from .csv_formatter import CsvFormatter
from .json_formatter import JsonFormatter
from .mermaid_formatter import MermaidFormatter
from .rich_formatter import RichFormatter


def get_formatter(name: str, delimiter: str = ",", min_weight: int = 0) -> BaseFormatter:
    """Get a formatter instance by name.

    Args:
        name: One of "csv", "json", "mermaid", "rich"
        delimiter: Field delimiter for the csv table
        min_weight: Edge threshold for the mermaid diagram

    Returns:
        Formatter instance

    Raises:
        ValueError: If name is not recognized
    """
    if name == "csv":
        return CsvFormatter(delimiter=delimiter)
    if name == "json":
        return JsonFormatter()
    if name == "mermaid":
        return MermaidFormatter(min_weight=min_weight)
    if name == "rich":
        return RichFormatter()
    choices = ("csv", "json", "mermaid", "rich")
    raise ValueError(f"Unknown formatter: {name!r}. Choose from: {', '.join(choices)}")


__all__ = [
    "BaseFormatter",
    "CsvFormatter",
    "JsonFormatter",
    "MermaidFormatter",
    "RichFormatter",
    "get_formatter",
]
