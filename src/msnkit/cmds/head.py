__all__ = ["head"]

import itertools
from typing import Iterable

from ..specio.mgf import SpectrumWriter
from ..specio.spec import Spectrum


def head(spectra: Iterable[Spectrum], writer: SpectrumWriter, number: int = 5) -> int:
    """Write the first ``number`` spectra and stop reading."""
    count = 0
    for spectrum in itertools.islice(spectra, max(number, 0)):
        writer.write(spectrum)
        count += 1
    return count
