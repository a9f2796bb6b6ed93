"""
Application settings: external programs used by teach.

Settings are read once from a YAML file and then passed explicitly to
whatever needs them (Makefile generation, preview, editing).
"""

import os
import sys
from pathlib import Path

import yaml

import teach.yaml

import logging
logger = logging.getLogger(__name__)

from typing import Any, Optional, Mapping, Sequence, Tuple, Union


SETTINGS_ENV_VAR = 'TEACH_SETTINGS'


class SettingsError(ValueError):
    pass


def _default_editor() -> str:
    editor = os.environ.get('EDITOR')
    if editor:
        return editor
    if sys.platform.startswith('win'):
        return 'notepad'
    return 'vim'

def _default_pdf_viewer() -> str:
    if sys.platform.startswith('win'):
        return 'AcroRd32'
    return 'evince'


class AppSettings:
    """
    Attributes:
      editor (str): program used to edit problems and the course file.
      pdf_viewer (str): program used to show previews.
      tex_engine (str): TeX engine, e.g. 'pdflatex' or 'lualatex'.
      tex_flags (tuple of str): arguments passed to the engine.
      tex_timeout (float or None): seconds a preview engine run may take;
        None means no limit.
    """

    __slots__ = [
        'editor', 'pdf_viewer', 'tex_engine', 'tex_flags', 'tex_timeout' ]

    editor: str
    pdf_viewer: str
    tex_engine: str
    tex_flags: Tuple[str, ...]
    tex_timeout: Optional[float]

    default_tex_engine = 'pdflatex'
    default_tex_flags = ('-interaction=nonstopmode',)

    def __init__( self,
        *, editor: Optional[str] = None, pdf_viewer: Optional[str] = None,
        tex_engine: Optional[str] = None,
        tex_flags: Optional[Sequence[str]] = None,
        tex_timeout: Union[None, int, float] = None,
    ) -> None:
        self.editor = editor if editor is not None else _default_editor()
        self.pdf_viewer = ( pdf_viewer
            if pdf_viewer is not None else _default_pdf_viewer() )
        self.tex_engine = ( tex_engine
            if tex_engine is not None else self.default_tex_engine )
        self.tex_flags = tuple( tex_flags
            if tex_flags is not None else self.default_tex_flags )
        if tex_timeout is not None and tex_timeout <= 0:
            raise SettingsError(
                "tex_timeout must be positive, got {!r}".format(tex_timeout) )
        self.tex_timeout = tex_timeout

    @classmethod
    def from_record(cls, record: Mapping[str, Any]) -> 'AppSettings':
        if not isinstance(record, Mapping):
            raise SettingsError(
                "Settings must be a mapping, got {}".format(type(record)) )
        unknown_keys = set(record) - set(cls.__slots__)
        if unknown_keys:
            raise SettingsError( "Unknown settings: {}"
                .format(', '.join(sorted(map(str, unknown_keys)))) )
        for key in ('editor', 'pdf_viewer', 'tex_engine'):
            value = record.get(key)
            if value is not None and not isinstance(value, str):
                raise SettingsError( "Setting {} must be a string, got {}"
                    .format(key, type(value)) )
        tex_flags = record.get('tex_flags')
        if isinstance(tex_flags, str):
            tex_flags = tex_flags.split()
        elif tex_flags is not None and (
            not isinstance(tex_flags, list) or
            not all(isinstance(flag, str) for flag in tex_flags)
        ):
            raise SettingsError(
                "Setting tex_flags must be a list of strings" )
        tex_timeout = record.get('tex_timeout')
        if tex_timeout is not None and (
            isinstance(tex_timeout, bool) or
            not isinstance(tex_timeout, (int, float))
        ):
            raise SettingsError( "Setting tex_timeout must be a number, got {}"
                .format(type(tex_timeout)) )
        return cls(
            editor=record.get('editor'),
            pdf_viewer=record.get('pdf_viewer'),
            tex_engine=record.get('tex_engine'),
            tex_flags=tex_flags,
            tex_timeout=tex_timeout )

    @classmethod
    def load(cls, path: Optional[Path] = None) -> 'AppSettings':
        """
        Load settings from a YAML file.

        Args:
          path (Path, optional): settings file. Default is given by
            default_settings_path().

        A missing file is not an error: all settings take their defaults.

        Raises:
          SettingsError: if the file content is malformed.
        """
        if path is None:
            path = default_settings_path()
        if not path.exists():
            logger.debug( "No settings file at %(path)s, using defaults",
                dict(path=path) )
            return cls()
        with path.open(encoding='utf-8') as settings_file:
            try:
                record = teach.yaml.load(settings_file)
            except yaml.YAMLError as error:
                raise SettingsError(
                    "Failed to parse {}: {}".format(path, error) ) from error
        if record is None:
            return cls()
        logger.debug("Loaded settings from %(path)s", dict(path=path))
        return cls.from_record(record)

    def __repr__(self) -> str:
        return "{}({})".format( self.__class__.__name__,
            ', '.join( '{}={!r}'.format(name, getattr(self, name))
                for name in self.__slots__ ))


def default_settings_path() -> Path:
    explicit = os.environ.get(SETTINGS_ENV_VAR)
    if explicit:
        return Path(explicit)
    config_home = os.environ.get('XDG_CONFIG_HOME')
    if config_home:
        config_dir = Path(config_home)
    else:
        config_dir = Path.home() / '.config'
    return config_dir / 'teach' / 'settings.yaml'
