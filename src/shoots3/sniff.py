"""
Content-type detection from the leading bytes of a file.

Implements the browser MIME-sniffing table (the same one Go's
`http.DetectContentType` uses): signatures are tried in order and the first
match wins. Files that match nothing are reported as text when they contain
no binary control bytes, otherwise as `application/octet-stream`.
"""

from dataclasses import dataclass
from typing import BinaryIO

from . import config as cfg

OCTET_STREAM = "application/octet-stream"
TEXT_PLAIN = "text/plain; charset=utf-8"

_WHITESPACE = b"\t\n\x0c\r "


@dataclass(frozen=True)
class HtmlSig:
    tag: bytes

    def match(self, data: bytes, first_non_ws: int) -> str:
        data = data[first_non_ws:]
        if len(data) < len(self.tag) + 1:
            return ""
        for i, b in enumerate(self.tag):
            db = data[i]
            if ord("A") <= b <= ord("Z"):
                db &= 0xDF
            if b != db:
                return ""
        # The tag must be followed by a tag-terminating byte.
        if data[len(self.tag)] not in b" >":
            return ""
        return "text/html; charset=utf-8"


@dataclass(frozen=True)
class MaskedSig:
    mask: bytes
    pat: bytes
    content_type: str
    skip_ws: bool = False

    def match(self, data: bytes, first_non_ws: int) -> str:
        if self.skip_ws:
            data = data[first_non_ws:]
        if len(self.pat) != len(self.mask) or len(data) < len(self.pat):
            return ""
        for d, m, p in zip(data, self.mask, self.pat):
            if d & m != p:
                return ""
        return self.content_type


@dataclass(frozen=True)
class ExactSig:
    sig: bytes
    content_type: str

    def match(self, data: bytes, first_non_ws: int) -> str:
        return self.content_type if data.startswith(self.sig) else ""


class Mp4Sig:
    def match(self, data: bytes, first_non_ws: int) -> str:
        if len(data) < 12:
            return ""
        box_size = int.from_bytes(data[:4], "big")
        if len(data) < box_size or box_size % 4 != 0:
            return ""
        if data[4:8] != b"ftyp":
            return ""
        for st in range(8, box_size, 4):
            if st == 12:
                # Bytes 12-15 hold the minor version, not a brand.
                continue
            if data[st : st + 3] == b"mp4":
                return "video/mp4"
        return ""


class TextSig:
    def match(self, data: bytes, first_non_ws: int) -> str:
        for b in data[first_non_ws:]:
            if b <= 0x08 or b == 0x0B or 0x0E <= b <= 0x1A or 0x1C <= b <= 0x1F:
                return ""
        return TEXT_PLAIN


_RIFF_MASK = b"\xff\xff\xff\xff\x00\x00\x00\x00\xff\xff\xff\xff"

SIGNATURES = (
    *(
        HtmlSig(tag)
        for tag in (
            b"<!DOCTYPE HTML",
            b"<HTML",
            b"<HEAD",
            b"<SCRIPT",
            b"<IFRAME",
            b"<H1",
            b"<DIV",
            b"<FONT",
            b"<TABLE",
            b"<A",
            b"<STYLE",
            b"<TITLE",
            b"<B",
            b"<BODY",
            b"<BR",
            b"<P",
            b"<!--",
        )
    ),
    MaskedSig(b"\xff" * 5, b"<?xml", "text/xml; charset=utf-8", skip_ws=True),
    ExactSig(b"%PDF-", "application/pdf"),
    ExactSig(b"%!PS-Adobe-", "application/postscript"),
    # Byte order marks
    MaskedSig(b"\xff\xff\x00\x00", b"\xfe\xff\x00\x00", "text/plain; charset=utf-16be"),
    MaskedSig(b"\xff\xff\x00\x00", b"\xff\xfe\x00\x00", "text/plain; charset=utf-16le"),
    MaskedSig(b"\xff\xff\xff\x00", b"\xef\xbb\xbf\x00", TEXT_PLAIN),
    # Images
    ExactSig(b"\x00\x00\x01\x00", "image/x-icon"),
    ExactSig(b"\x00\x00\x02\x00", "image/x-icon"),
    ExactSig(b"BM", "image/bmp"),
    ExactSig(b"GIF87a", "image/gif"),
    ExactSig(b"GIF89a", "image/gif"),
    MaskedSig(_RIFF_MASK + b"\xff\xff", b"RIFF\x00\x00\x00\x00WEBPVP", "image/webp"),
    ExactSig(b"\x89PNG\r\n\x1a\n", "image/png"),
    ExactSig(b"\xff\xd8\xff", "image/jpeg"),
    # Audio and video
    MaskedSig(b"\xff\xff\xff\xff", b".snd", "audio/basic"),
    MaskedSig(_RIFF_MASK, b"FORM\x00\x00\x00\x00AIFF", "audio/aiff"),
    MaskedSig(b"\xff\xff\xff", b"ID3", "audio/mpeg"),
    MaskedSig(b"\xff\xff\xff\xff\xff", b"OggS\x00", "application/ogg"),
    MaskedSig(b"\xff" * 8, b"MThd\x00\x00\x00\x06", "audio/midi"),
    MaskedSig(_RIFF_MASK, b"RIFF\x00\x00\x00\x00AVI ", "video/avi"),
    MaskedSig(_RIFF_MASK, b"RIFF\x00\x00\x00\x00WAVE", "audio/wave"),
    Mp4Sig(),
    ExactSig(b"\x1a\x45\xdf\xa3", "video/webm"),
    # Fonts
    MaskedSig(b"\x00" * 34 + b"\xff\xff", b"\x00" * 34 + b"LP", "application/vnd.ms-fontobject"),
    ExactSig(b"\x00\x01\x00\x00", "font/ttf"),
    ExactSig(b"OTTO", "font/otf"),
    ExactSig(b"ttcf", "font/collection"),
    ExactSig(b"wOFF", "font/woff"),
    ExactSig(b"wOF2", "font/woff2"),
    # Archives
    ExactSig(b"\x1f\x8b\x08", "application/x-gzip"),
    ExactSig(b"PK\x03\x04", "application/zip"),
    ExactSig(b"Rar!\x1a\x07\x00", "application/x-rar-compressed"),
    ExactSig(b"Rar!\x1a\x07\x01\x00", "application/x-rar-compressed"),
    ExactSig(b"\x00asm", "application/wasm"),
    TextSig(),
)


def detect_content_type(data: bytes) -> str:
    """Return the MIME type for `data`, considering at most the first 512 bytes."""
    data = data[: cfg.SNIFF_LEN]

    first_non_ws = 0
    while first_non_ws < len(data) and data[first_non_ws] in _WHITESPACE:
        first_non_ws += 1

    for sig in SIGNATURES:
        content_type = sig.match(data, first_non_ws)
        if content_type:
            return content_type
    return OCTET_STREAM


def sniff_file(fp: BinaryIO) -> str:
    """Detect the content type of an open binary file and rewind it."""
    head = fp.read(cfg.SNIFF_LEN)
    fp.seek(0)
    return detect_content_type(head)
