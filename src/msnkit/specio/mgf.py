__all__ = ["MgfReader", "MgfReaderState", "SpectrumWriter"]

import enum
import logging
import os
from typing import IO, Any, List, Mapping, Optional, Union

from ..util.io.json import write_json_line
from ..util.io.path import open_input
from .abs import SpectrumReaderBase
from .errors import MalformedRecordError, NumericParseError, UnexpectedEndOfInputError
from .formats import SpectrumFormat
from .spec import Spectrum

logger = logging.getLogger(__name__)

BEGIN_IONS = "BEGIN IONS"
END_IONS = "END IONS"


def _chomp(line: str) -> str:
    if line.endswith("\r\n"):
        return line[:-2]
    if line.endswith("\n"):
        return line[:-1]
    return line


class MgfReaderState(enum.Enum):
    AWAIT_BEGIN = "await_begin"
    IN_RECORD = "in_record"
    DONE = "done"


class MgfReader(SpectrumReaderBase[Spectrum]):
    """Pull parser for Mascot Generic Format.

    Every record must start with ``BEGIN IONS`` and end with ``END IONS``.
    Lines in between are either ``KEY=VALUE`` metadata or tab separated
    ``mz<TAB>intensity`` peaks; peaks keep the file order. Surrounding
    whitespace of metadata and peak lines is stripped before splitting.
    """

    def __init__(self, file: Union[str, os.PathLike, IO]):
        if isinstance(file, (str, os.PathLike)):
            file = open_input(file)
        self.reader = file
        self.state = MgfReaderState.AWAIT_BEGIN
        self.line_number = 0

    def close(self):
        return self.reader.close()

    def _readline(self) -> str:
        try:
            line = self.reader.readline()
            if isinstance(line, bytes):
                line = line.decode("utf-8")
        except UnicodeDecodeError as e:
            raise MalformedRecordError(
                f"[Line {self.line_number + 1}] invalid UTF-8 text: {e}"
            ) from e
        if line:
            self.line_number += 1
        return line

    def _error_prefix(self) -> str:
        return f"[Line {self.line_number}] "

    def _parse_float(self, token: str) -> float:
        try:
            if "_" in token:
                raise ValueError(token)
            return float(token)
        except ValueError:
            raise NumericParseError(
                self._error_prefix() + f"invalid floating-point value: {token!r}"
            ) from None

    def read_spectrum(self) -> Optional[Spectrum]:
        if self.state is MgfReaderState.DONE:
            return None

        line = self._readline()
        if not line:
            logger.debug("end of MGF input after %d lines", self.line_number)
            self.state = MgfReaderState.DONE
            return None

        if _chomp(line) != BEGIN_IONS:
            raise MalformedRecordError(
                self._error_prefix() + f"expected '{BEGIN_IONS}', got {line!r}"
            )

        self.state = MgfReaderState.IN_RECORD
        try:
            return self._read_record()
        finally:
            self.state = MgfReaderState.AWAIT_BEGIN

    def _read_record(self) -> Spectrum:
        metadata = {}
        mz: List[float] = []
        intensities: List[float] = []

        while True:
            line = self._readline()
            if not line:
                raise UnexpectedEndOfInputError(
                    self._error_prefix() + f"unexpected end of input, expected '{END_IONS}'"
                )

            if _chomp(line) == END_IONS:
                break

            if "=" in line:
                key, value = line.strip().split("=", 1)
                metadata[key] = value
            elif "\t" in line:
                s = line.strip().split("\t", 1)
                if len(s) != 2:
                    raise MalformedRecordError(
                        self._error_prefix() + f"invalid peak line: {line!r}"
                    )
                mz.append(self._parse_float(s[0]))
                intensities.append(self._parse_float(s[1]))
            else:
                raise MalformedRecordError(
                    self._error_prefix() + f"invalid format: {line!r}"
                )

        return Spectrum(metadata=metadata, mz=mz, intensities=intensities)


class SpectrumWriter:
    """Writes spectra as MGF records or as newline-delimited JSON.

    MGF keys and values are written as is. Leading or trailing whitespace in
    them does not survive reading the record back, since the reader strips
    metadata lines.
    """

    def __init__(
        self,
        file: Union[str, os.PathLike, IO[str]],
        output_format: Union[SpectrumFormat, str] = SpectrumFormat.MGF,
    ):
        if isinstance(output_format, str):
            output_format = SpectrumFormat.from_str(output_format)
        if output_format not in (SpectrumFormat.MGF, SpectrumFormat.JSON):
            raise ValueError(f"unsupported output format: {output_format}")

        if isinstance(file, (str, os.PathLike)):
            file = open(file, "w", encoding="utf-8", newline="\n")
        self.writer = file
        self.output_format = output_format

    def __enter__(self):
        return self

    def __exit__(self, exc_type, exc_val, exc_tb):
        self.close()

    def close(self):
        return self.writer.close()

    def flush(self):
        return self.writer.flush()

    def write(self, spectrum: Spectrum):
        if self.output_format is SpectrumFormat.JSON:
            self.write_json(spectrum)
        else:
            self.write_mgf(spectrum)

    def write_json(self, spectrum: Spectrum):
        write_json_line(spectrum.to_dict(), self.writer)

    def write_json_record(self, record: Mapping[str, Any]):
        write_json_line(record, self.writer)

    def write_mgf(self, spectrum: Spectrum):
        lines = [BEGIN_IONS, "\n"]
        for k, v in spectrum.metadata.items():
            lines.append(f"{k}={v}\n")
        for m, i in zip(spectrum.mz.tolist(), spectrum.intensities.tolist()):
            lines.append(f"{m!r}\t{i!r}\n")
        lines.append(END_IONS)
        lines.append("\n")
        self.writer.write("".join(lines))
