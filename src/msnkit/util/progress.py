__all__ = ["TqdmProgressFactory", "NoProgressFactory"]

from typing import Iterable, TypeVar

import tqdm

T = TypeVar("T")


class TqdmProgressFactory:
    def __init__(self, unit: str = "spectra"):
        self.unit = unit

    def __call__(self, iterable: Iterable[T], *args, **kwds) -> Iterable[T]:
        kwds.setdefault("unit", self.unit)
        return tqdm.tqdm(iterable, *args, **kwds)


class NoProgressFactory:
    def __call__(self, iterable: Iterable[T], *args, **kwds) -> Iterable[T]:
        return iterable
