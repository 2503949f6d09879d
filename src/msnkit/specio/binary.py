__all__ = ["decode_binary_array"]

import base64
import binascii
import zlib

import numpy as np

from .cvparam import CompressionType, DataType
from .errors import BinaryDecodeError


def decode_binary_array(
    text: str,
    compression_type: CompressionType,
    data_type: DataType,
) -> np.ndarray:
    """Decode a base64 ``<binary>`` payload into float64 values.

    The payload is a little-endian array of 32-bit or 64-bit floats, optionally
    zlib compressed. Trailing bytes that do not make up a whole element are
    ignored.
    """
    try:
        decoded = base64.b64decode("".join(text.split()), validate=True)
    except (binascii.Error, ValueError) as e:
        raise BinaryDecodeError(f"unable to decode base64 binary: {e}") from e

    if compression_type is CompressionType.ZLIB:
        try:
            decoded = zlib.decompress(decoded)
        except zlib.error as e:
            raise BinaryDecodeError(f"unable to inflate zlib binary: {e}") from e

    dtype = data_type.dtype
    count = len(decoded) // dtype.itemsize
    if count == 0:
        return np.empty(0, dtype=np.float64)
    return np.frombuffer(decoded, dtype=dtype, count=count).astype(np.float64)
