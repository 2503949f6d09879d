__all__ = ["SummaryStatistics"]

from collections import Counter
from typing import Any, Dict, Iterable

from .specio.spec import Spectrum


class SummaryStatistics:
    def __init__(self):
        self.n_spectra = 0
        self.n_peaks = 0
        self.n_no_peaks = 0
        self.metadata_field_counts: Counter = Counter()

    def add_spectrum(self, spectrum: Spectrum):
        self.n_spectra += 1
        n_peaks = spectrum.num_peaks
        if n_peaks == 0:
            self.n_no_peaks += 1
        self.n_peaks += n_peaks
        self.metadata_field_counts.update(spectrum.metadata.keys())
        return self

    def add_spectra(self, spectra: Iterable[Spectrum]):
        for spectrum in spectra:
            self.add_spectrum(spectrum)
        return self

    @property
    def peaks_per_spectra(self) -> float:
        if self.n_spectra == 0:
            return 0.0
        return self.n_peaks / self.n_spectra

    def final_stats(self) -> Dict[str, Any]:
        return {
            "n_spectra": self.n_spectra,
            "n_peaks": self.n_peaks,
            "metadata_field_counts": dict(self.metadata_field_counts),
            "peaks_per_spectra": self.peaks_per_spectra,
            "n_no_peaks": self.n_no_peaks,
        }
