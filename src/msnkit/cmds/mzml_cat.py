__all__ = ["mzml_cat"]

from ..specio.formats import SpectrumFormat
from ..specio.mgf import SpectrumWriter
from ..specio.mzml import MzmlSpectrumReader


def mzml_cat(reader: MzmlSpectrumReader, writer: SpectrumWriter) -> int:
    """Write every spectrum of an mzML input.

    JSON output keeps the whole ``<spectrum>`` record, with cvParams and
    still-encoded binary arrays. MGF output decodes the peak arrays.
    """
    count = 0
    for spectrum in reader:
        if writer.output_format is SpectrumFormat.JSON:
            writer.write_json_record(spectrum.to_dict())
        else:
            writer.write(spectrum.to_spectrum())
        count += 1
    return count
