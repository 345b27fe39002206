"""Output renderers for extracted table metadata."""
from typing import Callable, Dict, List

from orameta.models.schema import Table
from orameta.output.csv import render_csv
from orameta.output.ddl import render_ddl
from orameta.output.json import render_json
from orameta.output.xml import render_xml

Renderer = Callable[..., str]


class UnsupportedFormatError(ValueError):
    """Raised when an unknown export format is requested."""


# format -> (renderer, file extension)
RENDERERS: Dict[str, tuple] = {
    'csv': (render_csv, 'csv'),
    'json': (render_json, 'json'),
    'xml': (render_xml, 'xml'),
    'ddl': (render_ddl, 'sql'),
}

FORMAT_ALIASES = {'sql': 'ddl'}


def normalize_format(fmt: str) -> str:
    """Return the canonical format name.

    Raises:
        UnsupportedFormatError: If the format is not recognized
    """
    name = (fmt or 'csv').strip().lower()
    name = FORMAT_ALIASES.get(name, name)
    if name not in RENDERERS:
        raise UnsupportedFormatError(
            f"Unsupported export format: '{fmt}'. "
            f"Supported formats: {', '.join(f.upper() for f in RENDERERS)}"
        )
    return name


def get_renderer(fmt: str) -> Renderer:
    return RENDERERS[normalize_format(fmt)][0]


def file_extension(fmt: str) -> str:
    return '.' + RENDERERS[normalize_format(fmt)][1]


def render(tables: List[Table], fmt: str, include_comments: bool = True,
           pretty: bool = True) -> str:
    """Render ``tables`` in the requested format."""
    return get_renderer(fmt)(tables, include_comments=include_comments, pretty=pretty)


__all__ = [
    'UnsupportedFormatError',
    'file_extension',
    'get_renderer',
    'normalize_format',
    'render',
    'render_csv',
    'render_ddl',
    'render_json',
    'render_xml',
]
