__all__ = [
    "CVParam",
    "Binary",
    "BinaryDataArray",
    "BinaryDataArrayList",
    "MzmlSpectrum",
    "MZ_ARRAY_ACCESSION",
    "INTENSITY_ARRAY_ACCESSION",
]

from dataclasses import asdict, dataclass, field
from typing import Any, Dict, List, Optional

import numpy as np
from lxml import etree

from .binary import decode_binary_array
from .cvparam import (
    CompressionType,
    DataType,
    resolve_compression_type,
    resolve_data_type,
)
from .errors import MalformedRecordError
from .spec import Spectrum

MZ_ARRAY_ACCESSION = "MS:1000514"
INTENSITY_ARRAY_ACCESSION = "MS:1000515"


def _local_name(tag) -> str:
    return etree.QName(tag).localname


def _children(element: etree._Element, name: str) -> List[etree._Element]:
    return [
        child
        for child in element
        if isinstance(child.tag, str) and _local_name(child.tag) == name
    ]


def _child(element: etree._Element, name: str) -> etree._Element:
    children = _children(element, name)
    if not children:
        raise MalformedRecordError(
            f"missing <{name}> in <{_local_name(element.tag)}>"
        )
    return children[0]


def _attrib(element: etree._Element, name: str) -> str:
    value = element.get(name, None)
    if value is None:
        raise MalformedRecordError(
            f"missing attribute '{name}' in <{_local_name(element.tag)}>"
        )
    return value


@dataclass(frozen=True)
class CVParam:
    cv_ref: str
    accession: str
    name: str
    value: Optional[str] = None
    unit_accession: Optional[str] = None
    unit_name: Optional[str] = None
    unit_cv_ref: Optional[str] = None

    @classmethod
    def from_element(cls, element: etree._Element) -> "CVParam":
        return cls(
            cv_ref=_attrib(element, "cvRef"),
            accession=_attrib(element, "accession"),
            name=_attrib(element, "name"),
            value=element.get("value", None),
            unit_accession=element.get("unitAccession", None),
            unit_name=element.get("unitName", None),
            unit_cv_ref=element.get("unitCvRef", None),
        )


def _cv_params(element: etree._Element) -> List[CVParam]:
    return [CVParam.from_element(e) for e in _children(element, "cvParam")]


@dataclass(frozen=True)
class Binary:
    content: str


@dataclass(frozen=True)
class BinaryDataArray:
    encoded_length: str
    cv_params: List[CVParam]
    binary: Binary

    @classmethod
    def from_element(cls, element: etree._Element) -> "BinaryDataArray":
        return cls(
            encoded_length=_attrib(element, "encodedLength"),
            cv_params=_cv_params(element),
            binary=Binary(_child(element, "binary").text or ""),
        )

    @property
    def data_type(self) -> DataType:
        return resolve_data_type(self.cv_params)

    @property
    def compression_type(self) -> CompressionType:
        return resolve_compression_type(self.cv_params)

    def has_accession(self, accession: str) -> bool:
        return any(p.accession == accession for p in self.cv_params)

    def to_array(self) -> np.ndarray:
        return decode_binary_array(
            self.binary.content,
            compression_type=self.compression_type,
            data_type=self.data_type,
        )


@dataclass(frozen=True)
class BinaryDataArrayList:
    count: str
    binary_data_arrays: List[BinaryDataArray] = field(default_factory=list)

    @classmethod
    def from_element(cls, element: etree._Element) -> "BinaryDataArrayList":
        return cls(
            count=_attrib(element, "count"),
            binary_data_arrays=[
                BinaryDataArray.from_element(e)
                for e in _children(element, "binaryDataArray")
            ],
        )

    def __len__(self):
        return len(self.binary_data_arrays)

    def __getitem__(self, i: int) -> BinaryDataArray:
        return self.binary_data_arrays[i]


@dataclass(frozen=True)
class MzmlSpectrum:
    """A ``<spectrum>`` element. Peak arrays are decoded on request."""

    cv_params: List[CVParam]
    index: str
    id: str
    default_array_length: str
    binary_data_array_list: BinaryDataArrayList

    @classmethod
    def from_element(cls, element: etree._Element) -> "MzmlSpectrum":
        if _local_name(element.tag) != "spectrum":
            raise MalformedRecordError(
                f"expected <spectrum>, got <{_local_name(element.tag)}>"
            )
        return cls(
            cv_params=_cv_params(element),
            index=_attrib(element, "index"),
            id=_attrib(element, "id"),
            default_array_length=_attrib(element, "defaultArrayLength"),
            binary_data_array_list=BinaryDataArrayList.from_element(
                _child(element, "binaryDataArrayList")
            ),
        )

    @classmethod
    def from_bytes(cls, data: bytes) -> "MzmlSpectrum":
        try:
            element = etree.fromstring(data)
        except etree.XMLSyntaxError as e:
            raise MalformedRecordError(f"invalid spectrum XML: {e}") from e
        return cls.from_element(element)

    def to_dict(self) -> Dict[str, Any]:
        return asdict(self)

    def decode_array(self, i: int) -> np.ndarray:
        return self.binary_data_array_list[i].to_array()

    def find_array(self, accession: str) -> Optional[int]:
        for i, array in enumerate(self.binary_data_array_list.binary_data_arrays):
            if array.has_accession(accession):
                return i
        return None

    def _decode_or_empty(self, i: Optional[int]) -> np.ndarray:
        if i is None:
            return np.empty(0, dtype=np.float64)
        return self.decode_array(i)

    def metadata(self) -> Dict[str, str]:
        metadata = {
            "id": self.id,
            "index": self.index,
            "defaultArrayLength": self.default_array_length,
        }
        for p in self.cv_params:
            metadata[p.name] = p.value if p.value is not None else ""
        return metadata

    def to_spectrum(self) -> Spectrum:
        mz_index = self.find_array(MZ_ARRAY_ACCESSION)
        intensity_index = self.find_array(INTENSITY_ARRAY_ACCESSION)
        unused = [
            i
            for i in range(len(self.binary_data_array_list))
            if i not in (mz_index, intensity_index)
        ]
        if mz_index is None and unused:
            mz_index = unused.pop(0)
        if intensity_index is None and unused:
            intensity_index = unused.pop(0)

        mz = self._decode_or_empty(mz_index)
        intensities = self._decode_or_empty(intensity_index)
        if mz.shape[0] != intensities.shape[0]:
            raise MalformedRecordError(
                f"spectrum {self.id}: {mz.shape[0]} m/z values "
                f"but {intensities.shape[0]} intensities"
            )

        return Spectrum(metadata=self.metadata(), mz=mz, intensities=intensities)
