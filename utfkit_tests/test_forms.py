import sys

import pytest

from utfkit.exceptions import InvalidScalarError, UnknownEncodingError
from utfkit.forms import EncodingForm, supported_encoding_names
from utfkit.types import Cursor, DecodeResult

PYTHON_CODECS = {
    EncodingForm.UTF8: 'utf-8',
    EncodingForm.UTF16BE: 'utf-16-be',
    EncodingForm.UTF16LE: 'utf-16-le',
    EncodingForm.UTF32BE: 'utf-32-be',
    EncodingForm.UTF32LE: 'utf-32-le',
}


@pytest.mark.parametrize('name, form', [
    ('utf8', EncodingForm.UTF8),
    ('UTF-8', EncodingForm.UTF8),
    ('utf_8', EncodingForm.UTF8),
    ('utf16be', EncodingForm.UTF16BE),
    ('UTF-16BE', EncodingForm.UTF16BE),
    ('Utf-16-Le', EncodingForm.UTF16LE),
    ('utf-32-be', EncodingForm.UTF32BE),
    ('UTF32LE', EncodingForm.UTF32LE),
])
def test_parse(name, form):
    assert EncodingForm.parse(name) is form


def test_parse_native_byte_order():
    suffix = 'be' if sys.byteorder == 'big' else 'le'
    assert EncodingForm.parse('utf-16') is EncodingForm('utf16' + suffix)
    assert EncodingForm.parse('UTF32') is EncodingForm('utf32' + suffix)


@pytest.mark.parametrize('name', ['', 'latin1', 'utf7', 'utf-64', 'ucs2'])
def test_parse_unknown(name):
    with pytest.raises(UnknownEncodingError):
        EncodingForm.parse(name)
    with pytest.raises(ValueError):
        EncodingForm.parse(name)


def test_native_rejects_other_widths():
    with pytest.raises(ValueError):
        EncodingForm.native(8)


def test_supported_names_all_parse():
    names = supported_encoding_names()
    assert len(names) == len(set(names))
    for name in names:
        EncodingForm.parse(name)
    assert {EncodingForm.parse(name) for name in names} == set(EncodingForm)


def test_unit_sizes():
    assert EncodingForm.UTF8.unit_size == 1
    assert EncodingForm.UTF16BE.unit_size == EncodingForm.UTF16LE.unit_size == 2
    assert EncodingForm.UTF32BE.unit_size == EncodingForm.UTF32LE.unit_size == 4


def test_code_units_leave_out_partial_unit():
    units = EncodingForm.UTF16BE.code_units(b'\x00A\x00')
    assert len(units) == 1
    assert units.readonly
    assert EncodingForm.UTF16BE.decode(units, len(units), Cursor()) == DecodeResult(1, 0x41)

    assert len(EncodingForm.UTF32LE.code_units(b'A\x00\x00')) == 0
    assert len(EncodingForm.UTF8.code_units(bytearray(b'abc'))) == 3


def test_unit_view_is_writable():
    buf = bytearray(4)
    units = EncodingForm.UTF16LE.unit_view(buf)
    assert EncodingForm.UTF16LE.encode(0x1F600, units) == 2
    units.release()
    assert bytes(buf) == '\U0001F600'.encode('utf-16-le')


@pytest.mark.parametrize('form', list(EncodingForm))
@pytest.mark.parametrize('scalar', [0x24, 0xA2, 0x20AC, 0x10348, 0x10FFFF])
def test_encode_scalar(form, scalar):
    assert form.encode_scalar(scalar) == chr(scalar).encode(PYTHON_CODECS[form])


@pytest.mark.parametrize('form', list(EncodingForm))
def test_encode_scalar_rejects_invalid(form):
    with pytest.raises(InvalidScalarError):
        form.encode_scalar(0xDC00)
    with pytest.raises(ValueError):
        form.encode_scalar(0x110000)
