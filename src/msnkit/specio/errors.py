__all__ = [
    "SpectrumFormatError",
    "MalformedRecordError",
    "NumericParseError",
    "UnexpectedEndOfInputError",
    "MissingDataTypeError",
    "MissingCompressionError",
    "BinaryDecodeError",
    "UnsupportedFormatError",
]


class SpectrumFormatError(ValueError):
    pass


class MalformedRecordError(SpectrumFormatError):
    pass


class NumericParseError(SpectrumFormatError):
    pass


class UnexpectedEndOfInputError(SpectrumFormatError):
    pass


class MissingDataTypeError(SpectrumFormatError):
    def __init__(self, message: str = "missing data type in controlled vocabulary parameters"):
        super().__init__(message)


class MissingCompressionError(SpectrumFormatError):
    def __init__(self, message: str = "missing compression in controlled vocabulary parameters"):
        super().__init__(message)


class BinaryDecodeError(SpectrumFormatError):
    pass


class UnsupportedFormatError(SpectrumFormatError):
    pass
