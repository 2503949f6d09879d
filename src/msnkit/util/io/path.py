__all__ = ["open_input", "resolve_zip_content_path", "strip_compression_ext"]

import gzip
import io
import os
import sys
from typing import IO, Optional, Tuple, Union
from zipfile import ZipFile

STDIN = "-"


def resolve_zip_content_path(path: str) -> Tuple[str, Optional[str]]:
    """Split ``archive.zip/inner/file.mgf`` into the archive path and member name."""
    if os.path.exists(path):
        return path, None

    parent_path = path
    content_path = None

    while (
        not os.path.exists(parent_path)
        or os.path.splitext(parent_path)[1].lower() != ".zip"
    ):
        parent, basename = os.path.split(parent_path)
        if parent == "" or basename == "":
            raise FileNotFoundError(f"file not found: {path}")

        parent_path = parent
        if content_path is None:
            content_path = basename
        else:
            content_path = f"{basename}/{content_path}"

    return parent_path, content_path


def strip_compression_ext(path: str) -> str:
    root, ext = os.path.splitext(path)
    if ext.lower() == ".gz":
        return root
    return path


def open_input(
    path: Union[str, os.PathLike, None], binary: bool = False
) -> Union[IO[str], IO[bytes]]:
    """Open a spectra file for reading.

    ``None`` or ``"-"`` reads stdin. Files ending with ``.gz`` are decompressed
    on the fly, and members of a zip archive can be addressed as
    ``archive.zip/member``.
    """
    if path is None or path == STDIN:
        if binary:
            return sys.stdin.buffer
        return sys.stdin

    path = os.fspath(path)
    parent_path, content_path = resolve_zip_content_path(path)
    if content_path is None:
        if os.path.splitext(parent_path)[1].lower() == ".gz":
            raw = gzip.open(parent_path, "rb")
        else:
            raw = open(parent_path, "rb")
    else:
        archive = ZipFile(parent_path)
        raw = archive.open(content_path, "r")
        if os.path.splitext(content_path)[1].lower() == ".gz":
            raw = gzip.GzipFile(fileobj=raw)

    if binary:
        return raw
    return io.TextIOWrapper(raw, encoding="utf-8", newline="")
