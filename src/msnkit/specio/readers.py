__all__ = ["open_spectrum_reader"]

import os
from typing import IO, Optional, Union

from ..util.io.path import open_input
from .abs import SpectrumReaderBase
from .errors import UnsupportedFormatError
from .formats import SpectrumFormat
from .mgf import MgfReader
from .mzml import MzmlReader
from .spec import Spectrum


def open_spectrum_reader(
    file: Union[str, os.PathLike, IO, None],
    spectrum_format: Union[SpectrumFormat, str, None] = None,
) -> SpectrumReaderBase[Spectrum]:
    """Open an MGF or mzML reader; ``None`` or ``"-"`` reads stdin."""
    if isinstance(spectrum_format, str):
        spectrum_format = SpectrumFormat.from_str(spectrum_format)
    if spectrum_format is None:
        file_name = os.fspath(file) if isinstance(file, (str, os.PathLike)) else None
        spectrum_format = SpectrumFormat.from_file_name(
            file_name, default=SpectrumFormat.MGF
        )

    if spectrum_format is SpectrumFormat.MGF:
        if file is None or isinstance(file, (str, os.PathLike)):
            file = open_input(file)
        return MgfReader(file)
    elif spectrum_format is SpectrumFormat.MZML:
        if file is None or isinstance(file, (str, os.PathLike)):
            file = open_input(file, binary=True)
        return MzmlReader(file)
    else:
        raise UnsupportedFormatError(
            f"unsupported input format: {spectrum_format.value}"
        )
