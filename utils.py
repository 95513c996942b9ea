import json
from collections.abc import Mapping
from typing import Any, Dict, Optional

from exceptions import ConfigurationException

_TRUE_VALUES = {"1", "true", "yes", "on"}
_FALSE_VALUES = {"0", "false", "no", "off", ""}


class JsExpression:
    """Raw JavaScript emitted verbatim by :func:`encode_js`."""

    def __init__(self, code: str):
        self.code = code

    def __eq__(self, other: object) -> bool:
        return isinstance(other, JsExpression) and other.code == self.code

    def __hash__(self) -> int:
        return hash(self.code)

    def __repr__(self) -> str:
        return f"JsExpression({self.code!r})"

    def __str__(self) -> str:
        return self.code


def _encode_string(value: str) -> str:
    # "</" would close the surrounding <script> element
    return json.dumps(value).replace("</", "<\\/")


def encode_js(value: Any, allow_raw: bool = True) -> str:
    """Encode a Python value as a JavaScript literal.

    Mappings, sequences and scalars follow JSON. ``JsExpression`` values are
    emitted as raw code, so callbacks can be passed in an options mapping.
    Strings prefixed with ``js:`` are raw code too unless ``allow_raw`` is
    false; pass ``allow_raw=False`` for any value that carries user input.
    """
    if isinstance(value, JsExpression):
        return value.code
    if isinstance(value, str):
        if allow_raw and value.startswith("js:"):
            return value[3:]
        return _encode_string(value)
    if value is None or isinstance(value, (bool, int, float)):
        return json.dumps(value)
    if isinstance(value, Mapping):
        items = (
            f"{_encode_string(str(key))}:{encode_js(item, allow_raw)}"
            for key, item in value.items()
        )
        return "{" + ",".join(items) + "}"
    if isinstance(value, (list, tuple, set, frozenset)):
        return "[" + ",".join(encode_js(item, allow_raw) for item in value) + "]"
    return _encode_string(str(value))


def merge_dicts(base: Mapping, override: Mapping) -> Dict[str, Any]:
    """Merge ``override`` into a copy of ``base``.

    Nested mappings are merged recursively; any other value in ``override``
    replaces the one in ``base``.
    """
    merged = dict(base)
    for key, value in override.items():
        current = merged.get(key)
        if isinstance(current, Mapping) and isinstance(value, Mapping):
            merged[key] = merge_dicts(current, value)
        else:
            merged[key] = value
    return merged


def parse_bool(value: Optional[str], default: bool = False) -> bool:
    """Parse a boolean environment value."""
    if value is None:
        return default
    normalized = value.strip().lower()
    if normalized in _TRUE_VALUES:
        return True
    if normalized in _FALSE_VALUES:
        return False
    raise ConfigurationException(f"Invalid boolean value: {value!r}")


def parse_options(value: Optional[str]) -> Dict[str, Any]:
    """Parse a JSON object of SDK options; blank means no options."""
    if not value or not value.strip():
        return {}
    try:
        options = json.loads(value)
    except json.JSONDecodeError as e:
        raise ConfigurationException(f"Options are not valid JSON: {e}") from e
    if not isinstance(options, dict):
        raise ConfigurationException("Options must be a JSON object")
    return options
