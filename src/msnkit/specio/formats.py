__all__ = ["SpectrumFormat"]

import enum
import os
from typing import Optional

from ..util.io.path import strip_compression_ext


class SpectrumFormat(enum.Enum):
    JSON = "json"
    MGF = "mgf"
    MZML = "mzml"

    def __str__(self):
        return self.value

    @classmethod
    def from_str(cls, s: str) -> "SpectrumFormat":
        try:
            return cls(s)
        except ValueError:
            raise ValueError(f"Cannot parse format: {s}") from None

    @classmethod
    def from_file_name(
        cls, file_name: Optional[str], default: "SpectrumFormat"
    ) -> "SpectrumFormat":
        if not file_name or file_name == "-":
            return default
        ext = os.path.splitext(strip_compression_ext(file_name))[1].lower()
        if ext == ".mgf":
            return cls.MGF
        if ext in (".mzml", ".xml"):
            return cls.MZML
        if ext in (".json", ".jsonl", ".ndjson"):
            return cls.JSON
        return default
