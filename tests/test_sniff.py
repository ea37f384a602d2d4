import io

import pytest

from shoots3.sniff import OCTET_STREAM, TEXT_PLAIN, detect_content_type, sniff_file


def test_png(png_bytes):
    assert detect_content_type(png_bytes) == "image/png"


def test_plain_text():
    assert detect_content_type(b"just some ascii text\n") == TEXT_PLAIN
    assert TEXT_PLAIN == "text/plain; charset=utf-8"


def test_empty_is_text():
    assert detect_content_type(b"") == TEXT_PLAIN


def test_binary_falls_back_to_octet_stream():
    assert detect_content_type(b"\x01\x02\x03\x04 binary") == OCTET_STREAM


@pytest.mark.parametrize(
    "data, expected",
    [
        (b"<!DOCTYPE html><html></html>", "text/html; charset=utf-8"),
        (b"  \n<html lang='en'>", "text/html; charset=utf-8"),
        (b"<P>paragraph", "text/html; charset=utf-8"),
        (b"<!-- comment -->", "text/html; charset=utf-8"),
        (b"\n<?xml version='1.0'?><a/>", "text/xml; charset=utf-8"),
        (b"%PDF-1.7\n", "application/pdf"),
        (b"%!PS-Adobe-3.0", "application/postscript"),
        (b"\xfe\xff\x00h", "text/plain; charset=utf-16be"),
        (b"\xff\xfeh\x00", "text/plain; charset=utf-16le"),
        (b"\xef\xbb\xbfhello", "text/plain; charset=utf-8"),
        (b"GIF89a\x01\x00", "image/gif"),
        (b"\xff\xd8\xff\xe0\x00\x10JFIF", "image/jpeg"),
        (b"BM\x00\x00", "image/bmp"),
        (b"RIFF\x10\x00\x00\x00WEBPVP8 ", "image/webp"),
        (b"RIFF\x10\x00\x00\x00WAVEfmt ", "audio/wave"),
        (b"RIFF\x10\x00\x00\x00AVI LIST", "video/avi"),
        (b"ID3\x03\x00", "audio/mpeg"),
        (b"OggS\x00\x02", "application/ogg"),
        (b"\x1a\x45\xdf\xa3\x01", "video/webm"),
        (b"wOF2\x00\x01", "font/woff2"),
        (b"\x1f\x8b\x08\x00", "application/x-gzip"),
        (b"PK\x03\x04\x14\x00", "application/zip"),
        (b"Rar!\x1a\x07\x01\x00", "application/x-rar-compressed"),
        (b"\x00asm\x01\x00\x00\x00", "application/wasm"),
    ],
)
def test_signatures(data, expected):
    assert detect_content_type(data) == expected


def test_html_tag_needs_terminator():
    # "<BR" followed by a letter is not a tag match, and the text is still plain.
    assert detect_content_type(b"<BRAND new") == TEXT_PLAIN


def test_mp4():
    data = b"\x00\x00\x00\x18ftypmp42\x00\x00\x00\x00mp41isom" + b"\x00" * 8
    assert detect_content_type(data) == "video/mp4"


def test_only_first_512_bytes_considered():
    data = b"a" * 512 + b"\x00\x01\x02"
    assert detect_content_type(data) == TEXT_PLAIN


def test_sniff_file_rewinds():
    fp = io.BytesIO(b"%PDF-1.4\n" + b"x" * 2000)
    assert sniff_file(fp) == "application/pdf"
    assert fp.tell() == 0
