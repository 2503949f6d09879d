__all__ = ["Spectrum", "MzArray", "IntensityArray"]

from dataclasses import dataclass, field
from typing import Any, Dict, Iterable, Union

import numpy as np
import numpy.typing as npt

from ..util.io.json import dumps_json_line

MzArray = npt.NDArray[np.float64]
IntensityArray = npt.NDArray[np.float64]


def _as_float_array(values: Union[Iterable[float], np.ndarray, None]) -> np.ndarray:
    if values is None:
        return np.empty(0, dtype=np.float64)
    if isinstance(values, np.ndarray):
        return values.astype(np.float64, copy=False)
    return np.array(list(values), dtype=np.float64)


@dataclass(frozen=True, eq=False)
class Spectrum:
    """One scan: string metadata plus paired m/z and intensity arrays."""

    metadata: Dict[str, str] = field(default_factory=dict)
    mz: MzArray = field(default_factory=lambda: np.empty(0, dtype=np.float64))
    intensities: IntensityArray = field(
        default_factory=lambda: np.empty(0, dtype=np.float64)
    )

    def __post_init__(self):
        object.__setattr__(self, "metadata", dict(self.metadata))
        object.__setattr__(self, "mz", _as_float_array(self.mz))
        object.__setattr__(self, "intensities", _as_float_array(self.intensities))

        for f in [self.mz, self.intensities]:
            if len(f.shape) != 1:
                raise ValueError("invalid array shape")
        if self.mz.shape[0] != self.intensities.shape[0]:
            raise ValueError(
                f"array length not match: {self.mz.shape[0]} m/z values, "
                f"{self.intensities.shape[0]} intensities"
            )

    @classmethod
    def empty(cls) -> "Spectrum":
        return cls()

    @property
    def num_peaks(self) -> int:
        return self.mz.shape[0]

    def is_empty(self) -> bool:
        return self.num_peaks == 0 and len(self.metadata) == 0

    def to_dict(self) -> Dict[str, Any]:
        return {
            "metadata": dict(self.metadata),
            "mz": self.mz.tolist(),
            "intensities": self.intensities.tolist(),
        }

    def __eq__(self, other):
        if not isinstance(other, Spectrum):
            return NotImplemented
        return (
            self.metadata == other.metadata
            and np.array_equal(self.mz, other.mz)
            and np.array_equal(self.intensities, other.intensities)
        )

    __hash__ = None  # type: ignore

    def __str__(self):
        return dumps_json_line(self.to_dict())
