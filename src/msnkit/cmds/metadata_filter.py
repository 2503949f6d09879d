__all__ = ["metadata_filter"]

from typing import Iterable, Optional

from ..specio.mgf import SpectrumWriter
from ..specio.spec import Spectrum


def metadata_filter(
    spectra: Iterable[Spectrum],
    writer: SpectrumWriter,
    key: str,
    value: Optional[str] = None,
) -> int:
    """Write spectra carrying ``key`` in their metadata.

    When ``value`` is given, the metadata value must also equal it.
    """
    count = 0
    for spectrum in spectra:
        found_value = spectrum.metadata.get(key, None)
        if found_value is None:
            continue
        if value is not None and found_value != value:
            continue
        writer.write(spectrum)
        count += 1
    return count
