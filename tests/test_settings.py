"""Tests for application settings."""

from pathlib import Path

import pytest

from teach.settings import AppSettings, SettingsError, default_settings_path


class TestDefaults:

    def test_missing_file_gives_defaults(self, tmp_path: Path, monkeypatch):
        monkeypatch.setenv('EDITOR', 'nano')
        settings = AppSettings.load(tmp_path / 'absent.yaml')
        assert settings.editor == 'nano'
        assert settings.tex_engine == 'pdflatex'
        assert settings.tex_flags == ('-interaction=nonstopmode',)
        assert settings.tex_timeout is None

    def test_editor_falls_back_without_environment(self, monkeypatch):
        monkeypatch.delenv('EDITOR', raising=False)
        monkeypatch.setattr('sys.platform', 'linux')
        assert AppSettings().editor == 'vim'

    def test_empty_file_gives_defaults(self, tmp_path: Path):
        path = tmp_path / 'settings.yaml'
        path.write_text('', encoding='utf-8')
        assert AppSettings.load(path).pdf_viewer == AppSettings().pdf_viewer


class TestLoad:

    def test_values_are_read(self, tmp_path: Path):
        path = tmp_path / 'settings.yaml'
        path.write_text(
            "editor: emacs\n"
            "pdf_viewer: zathura\n"
            "tex_engine: lualatex\n"
            "tex_flags: [-interaction=batchmode, -halt-on-error]\n"
            "tex_timeout: 30\n",
            encoding='utf-8' )
        settings = AppSettings.load(path)
        assert settings.editor == 'emacs'
        assert settings.pdf_viewer == 'zathura'
        assert settings.tex_engine == 'lualatex'
        assert settings.tex_flags == (
            '-interaction=batchmode', '-halt-on-error' )
        assert settings.tex_timeout == 30

    def test_string_flags_are_split(self):
        settings = AppSettings.from_record(
            {'tex_flags': '-interaction=nonstopmode -shell-escape'} )
        assert settings.tex_flags == (
            '-interaction=nonstopmode', '-shell-escape' )

    def test_unknown_key_is_rejected(self):
        with pytest.raises(SettingsError, match='Unknown settings: viewer'):
            AppSettings.from_record({'viewer': 'evince'})

    @pytest.mark.parametrize('timeout', [0, -1, 'long', True])
    def test_bad_timeout_is_rejected(self, timeout):
        with pytest.raises(SettingsError):
            AppSettings.from_record({'tex_timeout': timeout})

    def test_malformed_yaml_is_reported(self, tmp_path: Path):
        path = tmp_path / 'settings.yaml'
        path.write_text("editor: [vim\n", encoding='utf-8')
        with pytest.raises(SettingsError, match='Failed to parse'):
            AppSettings.load(path)

    def test_non_mapping_is_rejected(self, tmp_path: Path):
        path = tmp_path / 'settings.yaml'
        path.write_text("- vim\n", encoding='utf-8')
        with pytest.raises(SettingsError):
            AppSettings.load(path)


class TestDefaultSettingsPath:

    def test_explicit_variable_wins(self, monkeypatch):
        monkeypatch.setenv('TEACH_SETTINGS', '/etc/teach.yaml')
        assert default_settings_path() == Path('/etc/teach.yaml')

    def test_xdg_config_home(self, monkeypatch):
        monkeypatch.delenv('TEACH_SETTINGS')
        monkeypatch.setenv('XDG_CONFIG_HOME', '/home/u/.cfg')
        assert default_settings_path() == \
            Path('/home/u/.cfg/teach/settings.yaml')

    def test_home_config(self, monkeypatch, tmp_path: Path):
        monkeypatch.delenv('TEACH_SETTINGS')
        monkeypatch.delenv('XDG_CONFIG_HOME', raising=False)
        monkeypatch.setenv('HOME', str(tmp_path))
        assert default_settings_path() == \
            tmp_path / '.config' / 'teach' / 'settings.yaml'
