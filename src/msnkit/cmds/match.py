__all__ = ["match_spectra"]

from typing import Iterable

import pandas as pd

from ..similarity.matcher import PeakMatcher
from ..specio.spec import Spectrum


def match_spectra(
    spectra_a: Iterable[Spectrum],
    spectra_b: Iterable[Spectrum],
    matcher: PeakMatcher,
) -> pd.DataFrame:
    """Match the i-th spectrum of one input against the i-th of the other."""
    records = []
    for spectrum_index, (spec_a, spec_b) in enumerate(zip(spectra_a, spectra_b)):
        for index_a, index_b in matcher.find_matches(spec_a, spec_b):
            records.append(
                {
                    "spectrum_index": spectrum_index,
                    "index_a": index_a,
                    "index_b": index_b,
                    "mz_a": spec_a.mz[index_a],
                    "mz_b": spec_b.mz[index_b],
                }
            )
    return pd.DataFrame.from_records(
        records, columns=["spectrum_index", "index_a", "index_b", "mz_a", "mz_b"]
    )
