__all__ = ["SpectrumReaderBase"]

import abc
from typing import Generic, Iterator, Optional, TypeVar

T = TypeVar("T")


class SpectrumReaderBase(abc.ABC, Generic[T]):
    """Single-pass producer of records.

    ``read_spectrum`` pulls the next record, returning ``None`` at the end of
    the stream and raising on malformed input. Iteration is built on top of it.
    """

    def __enter__(self):
        return self

    def __exit__(self, exc_type, exc_val, exc_tb):
        self.close()

    def __next__(self) -> T:
        spec = self.read_spectrum()
        if spec is None:
            raise StopIteration()
        return spec

    def __iter__(self) -> Iterator[T]:
        return self

    def close(self):
        pass

    @abc.abstractmethod
    def read_spectrum(self) -> Optional[T]:
        pass
