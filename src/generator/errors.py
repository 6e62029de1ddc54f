"""Errors raised by the Combination Generator."""

from typing import Any, Dict, Optional


class GeneratorError(ValueError):
    """Base class for expected, recoverable generator errors."""

    code = "generator_error"

    def to_dict(self) -> Dict[str, Any]:
        return {"code": self.code, "message": str(self)}


class ListIndexOutOfRange(GeneratorError, IndexError):
    """A list index does not exist in the store."""

    code = "out_of_range"

    def __init__(self, index: int, size: int):
        self.index = index
        self.size = size
        super().__init__(f"List index {index} out of range (store holds {size} lists)")

    def to_dict(self) -> Dict[str, Any]:
        return {**super().to_dict(), "index": self.index, "size": self.size}


class AdmissionError(GeneratorError):
    """A request rejected before any enumeration work."""

    code = "admission_error"


class TooManyLists(AdmissionError):
    code = "too_many_lists"

    def __init__(self, count: int, max_lists: int):
        self.count = count
        self.max_lists = max_lists
        super().__init__(f"{count} lists given, plan allows at most {max_lists}")

    def to_dict(self) -> Dict[str, Any]:
        return {**super().to_dict(), "count": self.count, "max_lists": self.max_lists}


class TooManyItemsInList(AdmissionError):
    code = "too_many_items_in_list"

    def __init__(self, index: int, count: int, max_items: int):
        self.index = index
        self.count = count
        self.max_items = max_items
        super().__init__(
            f"List {index + 1} has {count} items, plan allows at most {max_items} per list"
        )

    def to_dict(self) -> Dict[str, Any]:
        return {
            **super().to_dict(),
            "index": self.index,
            "count": self.count,
            "max_items_per_list": self.max_items,
        }


class NoValidLists(AdmissionError):
    code = "no_valid_lists"

    def __init__(self, empty_index: Optional[int] = None):
        self.empty_index = empty_index
        if empty_index is None:
            message = "No lists to combine"
        else:
            message = f"List {empty_index + 1} has no items"
        super().__init__(message)

    def to_dict(self) -> Dict[str, Any]:
        return {**super().to_dict(), "index": self.empty_index}


class ExportNotAllowed(GeneratorError):
    """Export format not available on the caller's plan."""

    code = "export_not_allowed"

    def __init__(self, fmt: str):
        self.format = fmt
        super().__init__(f"Export format '{fmt}' is not available on this plan")

    def to_dict(self) -> Dict[str, Any]:
        return {**super().to_dict(), "format": self.format}
