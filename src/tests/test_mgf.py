import io

import numpy as np
import pytest
from numpy.testing import assert_array_equal

from msnkit.specio.errors import (
    MalformedRecordError,
    NumericParseError,
    UnexpectedEndOfInputError,
)
from msnkit.specio.mgf import MgfReader, MgfReaderState, SpectrumWriter
from msnkit.specio.spec import Spectrum


MGF_FILE_SIMPLE = """BEGIN IONS
PEPMASS=898.727
SCANS=1
13.00\t1.0
14.00\t1.0
END IONS
BEGIN IONS
PEPMASS=898.727
SCANS=1
END IONS
"""


def read_all(text):
    return list(MgfReader(io.StringIO(text)))


def test_reader():
    spectra = read_all(MGF_FILE_SIMPLE)

    assert spectra == [
        Spectrum(
            metadata={"PEPMASS": "898.727", "SCANS": "1"},
            mz=[13.0, 14.0],
            intensities=[1.0, 1.0],
        ),
        Spectrum(metadata={"PEPMASS": "898.727", "SCANS": "1"}),
    ]


def test_reader_binary_stream():
    reader = MgfReader(io.BytesIO(MGF_FILE_SIMPLE.encode("utf-8")))
    assert len(list(reader)) == 2


def test_reader_crlf_lines():
    spectra = read_all(MGF_FILE_SIMPLE.replace("\n", "\r\n"))
    assert len(spectra) == 2
    assert spectra[0].metadata == {"PEPMASS": "898.727", "SCANS": "1"}
    assert_array_equal(spectra[0].intensities, [1.0, 1.0])


def test_reader_keeps_peak_order():
    text = "BEGIN IONS\n300.5\t1\n100.25\t2\n200\t3\nEND IONS\n"
    spectrum = read_all(text)[0]
    assert_array_equal(spectrum.mz, [300.5, 100.25, 200.0])
    assert_array_equal(spectrum.intensities, [1.0, 2.0, 3.0])


def test_reader_metadata_last_write_wins():
    text = "BEGIN IONS\nTITLE=a\nTITLE=b=c\nEND IONS\n"
    spectrum = read_all(text)[0]
    assert spectrum.metadata == {"TITLE": "b=c"}


def test_empty_record_is_not_end_of_stream():
    reader = MgfReader(io.StringIO("BEGIN IONS\nEND IONS\n"))

    spectrum = reader.read_spectrum()
    assert spectrum is not None
    assert spectrum.is_empty()
    assert reader.state is MgfReaderState.AWAIT_BEGIN

    assert reader.read_spectrum() is None
    assert reader.state is MgfReaderState.DONE
    assert reader.read_spectrum() is None


def test_empty_input():
    assert read_all("") == []


def test_missing_begin_ions():
    reader = MgfReader(io.StringIO("PEPMASS=1\nBEGIN IONS\nEND IONS\n"))
    with pytest.raises(MalformedRecordError, match="BEGIN IONS"):
        next(reader)


def test_blank_line_between_records():
    with pytest.raises(MalformedRecordError):
        read_all("BEGIN IONS\nEND IONS\n\nBEGIN IONS\nEND IONS\n")


def test_unrecognized_line():
    with pytest.raises(MalformedRecordError, match="invalid format"):
        read_all("BEGIN IONS\n13.0 1.0\nEND IONS\n")


@pytest.mark.parametrize("peak", ["abc\t1.0", "1.0\tx", "1_000\t1.0", "1.0\t2.0\t3.0"])
def test_invalid_peak_value(peak):
    with pytest.raises(NumericParseError):
        read_all(f"BEGIN IONS\n{peak}\nEND IONS\n")


def test_invalid_utf8():
    reader = MgfReader(io.BytesIO(b"BEGIN IONS\nTITLE=\xff\nEND IONS\n"))
    with pytest.raises(MalformedRecordError, match=r"\[Line 2\] invalid UTF-8"):
        reader.read_spectrum()


def test_unexpected_end_of_input():
    reader = MgfReader(io.StringIO("BEGIN IONS\nSCANS=1\n13.0\t1.0\n"))
    with pytest.raises(UnexpectedEndOfInputError):
        reader.read_spectrum()
    assert reader.read_spectrum() is None


def test_error_does_not_hide_end_of_stream():
    reader = MgfReader(io.StringIO("BEGIN IONS\nbad\nEND IONS\n"))
    with pytest.raises(MalformedRecordError):
        reader.read_spectrum()
    assert reader.state is MgfReaderState.AWAIT_BEGIN
    with pytest.raises(MalformedRecordError):
        reader.read_spectrum()
    assert reader.read_spectrum() is None


def test_reader_from_path(tmp_path):
    path = tmp_path / "simple.mgf"
    path.write_text(MGF_FILE_SIMPLE)
    with MgfReader(str(path)) as reader:
        assert len(list(reader)) == 2


def test_writer_mgf():
    out = io.StringIO()
    writer = SpectrumWriter(out, "mgf")
    writer.write(
        Spectrum(metadata={"PEPMASS": "898.727", "SCANS": "1"}, mz=[13.0, 14.5], intensities=[1.0, 2.0])
    )
    assert out.getvalue() == (
        "BEGIN IONS\nPEPMASS=898.727\nSCANS=1\n13.0\t1.0\n14.5\t2.0\nEND IONS\n"
    )


def test_writer_json():
    out = io.StringIO()
    writer = SpectrumWriter(out, "json")
    writer.write(Spectrum(metadata={"SCANS": "1"}, mz=[13.0], intensities=[1.0]))
    writer.write(Spectrum.empty())
    assert out.getvalue() == (
        '{"metadata":{"SCANS":"1"},"mz":[13.0],"intensities":[1.0]}\n'
        '{"metadata":{},"mz":[],"intensities":[]}\n'
    )


def test_writer_rejects_mzml():
    with pytest.raises(ValueError):
        SpectrumWriter(io.StringIO(), "mzml")


def test_round_trip():
    spectra = [
        Spectrum(
            metadata={"TITLE": "scan 1", "PEPMASS": "445.12 1000", "CHARGE": "2+"},
            mz=[100.1, 200.000001, 1e-7, 1234.5678901234],
            intensities=[1.0, 0.333333333333, 5e10, 0.0],
        ),
        Spectrum(metadata={"TITLE": "no peaks"}),
    ]

    out = io.StringIO()
    writer = SpectrumWriter(out)
    for s in spectra:
        writer.write(s)

    assert read_all(out.getvalue()) == spectra


def test_round_trip_random_values():
    rng = np.random.default_rng(7)
    spectrum = Spectrum(
        metadata={"SCANS": "42"},
        mz=np.sort(rng.uniform(50, 2000, 100)),
        intensities=rng.exponential(1000, 100),
    )
    out = io.StringIO()
    SpectrumWriter(out).write(spectrum)
    assert read_all(out.getvalue()) == [spectrum]


def test_metadata_whitespace_is_stripped_on_read():
    out = io.StringIO()
    SpectrumWriter(out).write(Spectrum(metadata={"TITLE": " abc "}))
    assert out.getvalue() == "BEGIN IONS\nTITLE= abc \nEND IONS\n"
    assert read_all(out.getvalue()) == [Spectrum(metadata={"TITLE": "abc"})]
