import doctest

import pytest

import utfkit.byteorder
import utfkit.encoding.utf8
import utfkit.encoding.utf16
import utfkit.encoding.utf32
import utfkit.forms
import utfkit.scalar
import utfkit.transcoder
import utfkit.utils.dict


@pytest.mark.parametrize('module', [
    utfkit.byteorder,
    utfkit.encoding.utf8,
    utfkit.encoding.utf16,
    utfkit.encoding.utf32,
    utfkit.forms,
    utfkit.scalar,
    utfkit.transcoder,
    utfkit.utils.dict,
])
def test_doctests(module):
    result = doctest.testmod(module)
    assert result.attempted > 0
    assert result.failed == 0
