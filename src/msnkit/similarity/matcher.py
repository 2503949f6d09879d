__all__ = ["find_matches", "PeakMatcher"]

import os
from typing import List, Optional, Tuple, Union

from ..specio.spec import Spectrum
from ..util.config import Configurable, load_configs


def find_matches(
    spectrum_a: Spectrum,
    spectrum_b: Spectrum,
    tolerance: float = 0.05,
    shift: float = 0.0,
) -> List[Tuple[int, int]]:
    """Pair peaks of two spectra whose m/z agree within ``tolerance``.

    ``shift`` is added to every m/z of ``spectrum_b`` before comparing. Both
    m/z arrays must be sorted ascending. All pairs are reported, ordered by
    the index into ``spectrum_a`` and then by the index into ``spectrum_b``.
    """
    mz_a = spectrum_a.mz.tolist()
    mz_b = spectrum_b.mz.tolist()
    num_b = len(mz_b)

    lowest_idx = 0
    matches = []
    for i, mz1 in enumerate(mz_a):
        low_bound = mz1 - tolerance
        high_bound = mz1 + tolerance

        for j in range(lowest_idx, num_b):
            mz2 = mz_b[j] + shift
            if mz2 > high_bound:
                break
            elif mz2 < low_bound:
                # the excluded index itself, not j + 1
                lowest_idx = j
            else:
                matches.append((i, j))

    return matches


class PeakMatcher(Configurable):
    def __init__(
        self,
        configs: Union[str, dict, None] = None,
        tolerance: Optional[float] = None,
        shift: Optional[float] = None,
    ):
        super().__init__(
            os.path.join(os.path.dirname(os.path.abspath(__file__)), "matcher.yaml")
        )
        if configs is not None:
            if isinstance(configs, str):
                configs = load_configs(configs)
            self.set_configs(configs)
        if tolerance is not None:
            self.set_configs({"tolerance": tolerance})
        if shift is not None:
            self.set_configs({"shift": shift})

    @property
    def tolerance(self) -> float:
        return self.get_config("tolerance", typed=float, allow_convert=True)

    @property
    def shift(self) -> float:
        return self.get_config("shift", typed=float, allow_convert=True)

    def find_matches(
        self, spectrum_a: Spectrum, spectrum_b: Spectrum
    ) -> List[Tuple[int, int]]:
        return find_matches(
            spectrum_a, spectrum_b, tolerance=self.tolerance, shift=self.shift
        )
