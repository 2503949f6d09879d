__all__ = ["stats"]

from typing import IO, Any, Dict, Iterable

from ..specio.spec import Spectrum
from ..stats import SummaryStatistics
from ..util.io.json import write_json_line


def stats(spectra: Iterable[Spectrum], output: IO[str]) -> Dict[str, Any]:
    final_stats = SummaryStatistics().add_spectra(spectra).final_stats()
    write_json_line(final_stats, output)
    return final_stats
