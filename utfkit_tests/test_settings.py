import pytest
from pydantic import ValidationError

from utfkit.conf import TranscoderSettings, get_global_settings
from utfkit.conf import get_settings
from utfkit.forms import EncodingForm


@pytest.fixture
def reset_settings():
    get_settings._reset_settings_singleton()
    yield
    get_settings._reset_settings_singleton()


def test_defaults():
    settings = TranscoderSettings()
    assert settings.SOURCE_ENCODING == 'utf8'
    assert settings.TARGET_ENCODING is None
    assert settings.REPAIR is False
    assert settings.CHUNK_SIZE == 4096
    assert settings.MAX_TOTAL_BYTES == 0x7FFFFFFF
    assert settings.source_form is settings.target_form is EncodingForm.UTF8


@pytest.mark.parametrize('values', [
    dict(SOURCE_ENCODING='latin1'),
    dict(TARGET_ENCODING='utf7'),
    dict(CHUNK_SIZE=7),
    dict(MAX_TOTAL_BYTES=0),
    dict(UNKNOWN_FIELD=1),
])
def test_invalid_values(values):
    with pytest.raises(ValidationError):
        TranscoderSettings(**values)


def test_frozen():
    settings = TranscoderSettings()
    with pytest.raises(ValidationError):
        settings.REPAIR = True


def test_from_yaml_with_extends(tmp_path):
    (tmp_path / 'base.yml').write_text('SOURCE_ENCODING: utf-16-le\nCHUNK_SIZE: 128\nREPAIR: false\n')
    (tmp_path / 'custom.yml').write_text('extends: base.yml\nTARGET_ENCODING: UTF-8\nREPAIR: true\n')

    settings = TranscoderSettings.from_yaml(filepath=tmp_path / 'custom.yml')
    assert settings.source_form is EncodingForm.UTF16LE
    assert settings.target_form is EncodingForm.UTF8
    assert settings.CHUNK_SIZE == 128
    assert settings.REPAIR is True


def test_from_yaml_invalid(tmp_path):
    (tmp_path / 'bad.yml').write_text('SOURCE_ENCODING: ebcdic\n')
    with pytest.raises(ValidationError):
        TranscoderSettings.from_yaml(filepath=tmp_path / 'bad.yml')


def test_global_settings_defaults(monkeypatch, reset_settings):
    monkeypatch.delenv('UTFKIT_CONFIG_YAML', raising=False)
    settings = get_global_settings()
    assert settings == TranscoderSettings()
    assert get_global_settings() is settings
    assert get_settings.get_settings_source() is None


def test_global_settings_from_env(monkeypatch, reset_settings, tmp_path):
    first = tmp_path / 'first.yml'
    first.write_text('SOURCE_ENCODING: utf32be\n')
    second = tmp_path / 'second.yml'
    second.write_text('SOURCE_ENCODING: utf8\n')

    monkeypatch.setenv('UTFKIT_CONFIG_YAML', str(first))
    settings = get_global_settings()
    assert settings.source_form is EncodingForm.UTF32BE
    assert get_settings.get_settings_source() == str(first)
    assert get_global_settings() is settings

    monkeypatch.setenv('UTFKIT_CONFIG_YAML', str(second))
    with pytest.raises(Exception, match='different file'):
        get_global_settings()
