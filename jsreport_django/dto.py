"""
Data Transfer Objects for the jsreport filter
"""

from dataclasses import dataclass, field, fields, is_dataclass
from typing import Any, Dict, List, Optional, Union
from collections.abc import Mapping


# snake_case attribute -> jsreport wire name
PHANTOM_WIRE_NAMES = {
    'header_height': 'headerHeight',
    'footer_height': 'footerHeight',
    'wait_for_js': 'waitForJS',
    'resource_timeout': 'resourceTimeout',
    'block_javascript': 'blockJavaScript',
    'print_delay': 'printDelay',
}


def _drop_none(data: Dict[str, Any]) -> Dict[str, Any]:
    return {k: v for k, v in data.items() if v is not None}


@dataclass
class Phantom:
    """Page settings for the phantom-pdf recipe."""

    margin: Optional[str] = None
    header_height: Optional[str] = None
    header: Optional[str] = None
    footer_height: Optional[str] = None
    footer: Optional[str] = None
    orientation: Optional[str] = None
    width: Optional[str] = None
    height: Optional[str] = None
    format: Optional[str] = None
    wait_for_js: Optional[bool] = None
    resource_timeout: Optional[int] = None
    block_javascript: Optional[bool] = None
    print_delay: Optional[int] = None

    def to_dict(self) -> Dict[str, Any]:
        return _drop_none({
            PHANTOM_WIRE_NAMES.get(f.name, f.name): getattr(self, f.name)
            for f in fields(self)
        })


@dataclass
class Template:
    """Template part of a render request."""

    content: Optional[str] = None
    recipe: Optional[str] = None
    engine: Optional[str] = None
    phantom: Optional[Phantom] = None

    def to_dict(self) -> Dict[str, Any]:
        return _drop_none({
            'content': self.content,
            'recipe': self.recipe,
            'engine': self.engine,
            'phantom': self.phantom.to_dict() if self.phantom else None,
        })


@dataclass
class RenderRequest:
    """
    Structured request sent to the jsreport server.

    Built fresh for every intercepted response.
    """

    template: Template = field(default_factory=Template)
    data: Optional[Any] = None
    options: Optional[Dict[str, Any]] = None

    def to_dict(self) -> Dict[str, Any]:
        return _drop_none({
            'template': self.template.to_dict() if self.template else None,
            'data': to_jsonable(self.data),
            'options': to_jsonable(self.options),
        })


# Either the strict request type or a structurally copied mapping
RenderPayload = Union[RenderRequest, Dict[str, Any]]


def to_jsonable(value: Any) -> Any:
    """
    Convert a render payload into JSON-serializable data.

    Args:
        value: RenderRequest, mapping, sequence, dataclass or plain object

    Returns:
        Data composed of dicts, lists and scalars
    """
    if value is None or isinstance(value, (str, int, float, bool)):
        return value
    if hasattr(value, 'to_dict') and is_dataclass(value):
        return value.to_dict()
    if is_dataclass(value) and not isinstance(value, type):
        return {f.name: to_jsonable(getattr(value, f.name)) for f in fields(value)}
    if isinstance(value, Mapping):
        return {str(k): to_jsonable(v) for k, v in value.items()}
    if isinstance(value, (list, tuple, set)):
        return [to_jsonable(v) for v in value]
    if hasattr(value, '__dict__'):
        return {
            k: to_jsonable(v) for k, v in vars(value).items()
            if not k.startswith('_')
        }
    return value


@dataclass
class RenderResult:
    """
    Result returned by the jsreport server.

    Contains the output bytes and the header sets to forward onto the
    live response.
    """

    content: bytes
    content_type: str
    headers: Dict[str, List[str]] = field(default_factory=dict)
    content_headers: Dict[str, List[str]] = field(default_factory=dict)
    status_code: int = 200

    def __len__(self) -> int:
        """Return the size of the output in bytes"""
        return len(self.content)

    @property
    def file_extension(self) -> Optional[str]:
        """Extension reported by jsreport in the File-Extension header."""
        for name, values in self.headers.items():
            if name.lower() == 'file-extension' and values:
                return values[0]
        return None
