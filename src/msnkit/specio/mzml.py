__all__ = ["MzmlSpectrumReader", "MzmlReader"]

import io
import logging
import os
from typing import IO, Optional, Union
from xml.sax.saxutils import XMLGenerator

from ..util.io.path import open_input
from .abs import SpectrumReaderBase
from .errors import UnexpectedEndOfInputError
from .mzmltypes import MzmlSpectrum
from .spec import Spectrum
from .xmltokens import EndOfDocument, EndTag, StartTag, Text, XmlTokenSource

logger = logging.getLogger(__name__)

SPECTRUM_TAG = "spectrum"


class MzmlSpectrumReader(SpectrumReaderBase[MzmlSpectrum]):
    """Streams ``<spectrum>`` elements out of an mzML document.

    Each call skips ahead to the next ``<spectrum>`` start tag, copies the
    element up to its end tag into a standalone XML buffer, and deserializes
    that buffer. Binary arrays are left encoded until requested.
    """

    def __init__(self, file: Union[str, os.PathLike, IO], chunk_size: int = 64 * 1024):
        if isinstance(file, (str, os.PathLike)):
            file = open_input(file, binary=True)
        self.file = file
        self.tokens = XmlTokenSource(file, chunk_size=chunk_size)
        self.num_spectra = 0

    def close(self):
        return self.file.close()

    def read_spectrum(self) -> Optional[MzmlSpectrum]:
        while True:
            token = self.tokens.next_token()
            if isinstance(token, EndOfDocument):
                if self.tokens.truncated:
                    raise UnexpectedEndOfInputError(
                        f"unexpected end of input after {self.num_spectra} spectra: "
                        "incomplete XML document"
                    )
                logger.debug("end of mzML input after %d spectra", self.num_spectra)
                return None
            if isinstance(token, StartTag) and token.name == SPECTRUM_TAG:
                break

        data = self._capture(token)
        spectrum = MzmlSpectrum.from_bytes(data)
        self.num_spectra += 1
        logger.debug("read spectrum %s (%d bytes)", spectrum.id, len(data))
        return spectrum

    def _capture(self, start: StartTag) -> bytes:
        buffer = io.BytesIO()
        writer = XMLGenerator(buffer, encoding="utf-8", short_empty_elements=True)
        writer.startElement(start.name, start.attrib)

        while True:
            token = self.tokens.next_token()
            if isinstance(token, StartTag):
                writer.startElement(token.name, token.attrib)
            elif isinstance(token, Text):
                writer.characters(token.content)
            elif isinstance(token, EndTag):
                writer.endElement(token.name)
                if token.name == SPECTRUM_TAG:
                    break
            else:
                raise UnexpectedEndOfInputError(
                    f"unexpected end of input inside <{SPECTRUM_TAG}> "
                    f"(index {start.attrib.get('index', '?')})"
                )

        return buffer.getvalue()


class MzmlReader(SpectrumReaderBase[Spectrum]):
    def __init__(self, file: Union[str, os.PathLike, IO], **kwargs):
        self.reader = MzmlSpectrumReader(file, **kwargs)

    def close(self):
        return self.reader.close()

    def read_spectrum(self) -> Optional[Spectrum]:
        spec = self.reader.read_spectrum()
        if spec is None:
            return None
        return spec.to_spectrum()
