"""
Incremental XML tokenizer.

Turns a byte stream into start-tag, end-tag, text and end-of-document tokens
with namespace-free names. The stream is fed to an lxml pull parser one chunk
at a time, and elements are discarded as soon as their end tag has been
reported, so memory use stays bounded by the current nesting path.

Text is reported for leaf elements only, right before their end tag.
Whitespace between elements and mixed content are not reported.
An incomplete document still ends with an end-of-document token, with
``truncated`` set on the source.
"""

__all__ = ["StartTag", "EndTag", "Text", "EndOfDocument", "XmlToken", "XmlTokenSource"]

import collections
import logging
from dataclasses import dataclass, field
from typing import IO, Deque, Dict, Union

from lxml import etree

from .errors import MalformedRecordError

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class StartTag:
    name: str
    attrib: Dict[str, str] = field(default_factory=dict)


@dataclass(frozen=True)
class EndTag:
    name: str


@dataclass(frozen=True)
class Text:
    content: str


@dataclass(frozen=True)
class EndOfDocument:
    pass


XmlToken = Union[StartTag, EndTag, Text, EndOfDocument]


def _local_name(tag: str) -> str:
    return etree.QName(tag).localname


class XmlTokenSource:
    def __init__(self, file: IO, chunk_size: int = 64 * 1024):
        self.file = file
        self.chunk_size = chunk_size
        self.parser = etree.XMLPullParser(
            events=("start", "end"), huge_tree=True, resolve_entities=False
        )
        self.pending: Deque[XmlToken] = collections.deque()
        self.eof = False
        self.fed = False
        self.truncated = False

    def next_token(self) -> XmlToken:
        while not self.pending:
            if self.eof:
                return EndOfDocument()
            self._feed()
        return self.pending.popleft()

    def _feed(self):
        data = self.file.read(self.chunk_size)
        if isinstance(data, str):
            data = data.encode("utf-8")

        try:
            if data:
                self.fed = True
                self.parser.feed(data)
            else:
                self.eof = True
                self._close()
            self._collect_events()
        except etree.XMLSyntaxError as e:
            raise MalformedRecordError(f"invalid XML: {e}") from e

    def _close(self):
        try:
            self.parser.close()
        except etree.XMLSyntaxError as e:
            logger.debug("XML document ended early: %s", e)
            if self.fed:
                self.truncated = True

    def _collect_events(self):
        for event, element in self.parser.read_events():
            if not isinstance(element.tag, str):
                continue
            name = _local_name(element.tag)
            if event == "start":
                self.pending.append(
                    StartTag(
                        name=name,
                        attrib={_local_name(k): v for k, v in element.attrib.items()},
                    )
                )
            else:
                if len(element) == 0 and element.text:
                    self.pending.append(Text(element.text))
                self.pending.append(EndTag(name))
                self._release(element)

    @staticmethod
    def _release(element: etree._Element):
        element.clear(keep_tail=True)
        parent = element.getparent()
        if parent is not None:
            while element.getprevious() is not None:
                del parent[0]
