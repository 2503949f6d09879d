__all__ = [
    "DataType",
    "CompressionType",
    "DATA_TYPE_ACCESSIONS",
    "COMPRESSION_TYPE_ACCESSIONS",
    "resolve_data_type",
    "resolve_compression_type",
]

import enum
from typing import Iterable, Protocol

import numpy as np

from .errors import MissingCompressionError, MissingDataTypeError


class DataType(enum.Enum):
    FLOAT32 = "32-bit float"
    FLOAT64 = "64-bit float"

    @property
    def dtype(self) -> np.dtype:
        if self is DataType.FLOAT32:
            return np.dtype("<f4")
        return np.dtype("<f8")


class CompressionType(enum.Enum):
    NONE = "no compression"
    ZLIB = "zlib compression"


DATA_TYPE_ACCESSIONS = {
    "MS:1000521": DataType.FLOAT32,
    "MS:1000523": DataType.FLOAT64,
}

COMPRESSION_TYPE_ACCESSIONS = {
    "MS:1000576": CompressionType.NONE,
    "MS:1000574": CompressionType.ZLIB,
}


class HasAccession(Protocol):
    accession: str


def resolve_data_type(cv_params: Iterable[HasAccession]) -> DataType:
    for cv_param in cv_params:
        data_type = DATA_TYPE_ACCESSIONS.get(cv_param.accession, None)
        if data_type is not None:
            return data_type
    raise MissingDataTypeError()


def resolve_compression_type(cv_params: Iterable[HasAccession]) -> CompressionType:
    for cv_param in cv_params:
        compression_type = COMPRESSION_TYPE_ACCESSIONS.get(cv_param.accession, None)
        if compression_type is not None:
            return compression_type
    raise MissingCompressionError()
