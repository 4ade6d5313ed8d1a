"""Plugin descriptors (``.uplugin`` files) and the plugins listed in the browser."""

from __future__ import annotations

import json
import logging
from dataclasses import MISSING, dataclass, field, fields
from pathlib import Path
from typing import Any, Callable, Optional, TypeVar, Union

log = logging.getLogger(__name__)

_D = TypeVar("_D")


def _int(value: Any, key: str) -> int:
    if isinstance(value, bool) or not isinstance(value, int):
        raise ValueError(f"{key} must be an integer")
    return value


def _str(value: Any, key: str) -> str:
    if not isinstance(value, str):
        raise ValueError(f"{key} must be a string")
    return value


def _bool(value: Any, key: str) -> bool:
    if not isinstance(value, bool):
        raise ValueError(f"{key} must be a boolean")
    return value


def _str_list(value: Any, key: str) -> list[str]:
    if not isinstance(value, list) or not all(isinstance(v, str) for v in value):
        raise ValueError(f"{key} must be a list of strings")
    return list(value)


def _steps(value: Any, key: str) -> dict[str, list[str]]:
    if not isinstance(value, dict):
        raise ValueError(f"{key} must be an object")
    return {_str(k, key): _str_list(v, key) for k, v in value.items()}


def _str_maps(value: Any, key: str) -> list[dict[str, str]]:
    if not isinstance(value, list):
        raise ValueError(f"{key} must be a list")
    result = []
    for entry in value:
        if not isinstance(entry, dict):
            raise ValueError(f"{key} must hold objects")
        result.append({_str(k, key): _str(v, key) for k, v in entry.items()})
    return result


def _list_of(parser: Callable[[Any], _D]) -> Callable[[Any, str], list[_D]]:
    def convert(value: Any, key: str) -> list[_D]:
        if not isinstance(value, list):
            raise ValueError(f"{key} must be a list")
        return [parser(item) for item in value]

    return convert


def _field(
    conv: Callable[[Any, str], Any],
    *,
    key: Optional[str] = None,
    default: Any = MISSING,
    factory: Any = MISSING,
    optional: bool = False,
) -> Any:
    """A dataclass field that knows its JSON key and how to convert its value."""
    meta: dict[str, Any] = {"conv": conv, "optional": optional}
    if key is not None:
        meta["key"] = key
    if factory is not MISSING:
        return field(default_factory=factory, metadata=meta)
    if optional:
        return field(default=None, metadata=meta)
    if default is not MISSING:
        return field(default=default, metadata=meta)
    return field(metadata=meta)


def _pascal(name: str) -> str:
    return "".join(part.capitalize() for part in name.split("_"))


def _build(cls: type[_D], data: Any, what: str) -> _D:
    """Create *cls* from a decoded JSON object; unknown keys are ignored."""
    if not isinstance(data, dict):
        raise ValueError(f"{what} must be a JSON object")
    values: dict[str, Any] = {}
    for f in fields(cls):  # type: ignore[arg-type]
        key = f.metadata.get("key", _pascal(f.name))
        if key not in data:
            if f.default is MISSING and f.default_factory is MISSING:
                raise ValueError(f"{what} is missing {key}")
            continue
        value = data[key]
        if value is None and f.metadata["optional"]:
            values[f.name] = None
        else:
            values[f.name] = f.metadata["conv"](value, key)
    return cls(**values)


@dataclass
class Module:
    """A code module declared by a plugin or project."""

    name: str = _field(_str)
    type_field: str = _field(_str, key="Type", default="")
    loading_phase: str = _field(_str, default="")
    additional_dependencies: Optional[list[str]] = _field(_str_list, optional=True)
    platform_allow_list: list[str] = _field(_str_list, factory=list)
    program_allow_list: list[str] = _field(_str_list, factory=list)
    target_deny_list: list[str] = _field(_str_list, factory=list)
    platform_deny_list: list[str] = _field(_str_list, factory=list)
    target_configuration_deny_list: list[str] = _field(_str_list, factory=list)


@dataclass
class Plugin:
    """A reference to a plugin, with whether it is enabled."""

    name: str = _field(_str, default="")
    enabled: bool = _field(_bool, default=False)
    marketplace_url: Optional[str] = _field(_str, optional=True)
    supported_target_platforms: Optional[list[str]] = _field(_str_list, optional=True)
    platform_allow_list: list[str] = _field(_str_list, factory=list)
    target_allow_list: list[str] = _field(_str_list, factory=list)
    target_deny_list: list[str] = _field(_str_list, factory=list)
    optional: Optional[bool] = _field(_bool, optional=True)
    platform_deny_list: list[str] = _field(_str_list, factory=list)


def parse_module(data: Any) -> Module:
    """Build a Module from a decoded JSON object; ``Name`` is required."""
    return _build(Module, data, "module")


def parse_plugin(data: Any) -> Plugin:
    """Build a Plugin reference from a decoded JSON object."""
    return _build(Plugin, data, "plugin")


@dataclass
class Uplugin:
    """Contents of a ``.uplugin`` descriptor."""

    file_version: int = _field(_int, default=0)
    version: int = _field(_int, default=0)
    version_name: str = _field(_str, default="")
    friendly_name: str = _field(_str, default="")
    description: str = _field(_str, default="")
    category: str = _field(_str, default="")
    created_by: str = _field(_str, default="")
    docs_url: str = _field(_str, default="")
    marketplace_url: str = _field(_str, default="")
    support_url: str = _field(_str, default="")
    engine_version: Optional[list[str]] = _field(_str_list, optional=True)
    editor_custom_virtual_path: Optional[list[str]] = _field(_str_list, optional=True)
    enabled_by_default: Optional[bool] = _field(_bool, optional=True)
    can_contain_content: Optional[bool] = _field(_bool, optional=True)
    can_contain_verse: Optional[bool] = _field(_bool, optional=True)
    is_beta_version: Optional[bool] = _field(_bool, optional=True)
    is_experimental_version: Optional[bool] = _field(_bool, optional=True)
    installed: Optional[bool] = _field(_bool, optional=True)
    supported_target_platforms: Optional[list[str]] = _field(_str_list, optional=True)
    supported_programs: Optional[list[str]] = _field(_str_list, optional=True)
    b_is_plugin_extension: Optional[bool] = _field(_bool, optional=True)
    hidden: Optional[bool] = _field(_bool, optional=True)
    explicitly_loaded: Optional[bool] = _field(_bool, optional=True)
    has_explicit_platforms: Optional[bool] = _field(_bool, optional=True)
    pre_build_steps: Optional[dict[str, list[str]]] = _field(_steps, optional=True)
    post_build_steps: Optional[dict[str, list[str]]] = _field(_steps, optional=True)
    plugins: Optional[list[Plugin]] = _field(_list_of(parse_plugin), optional=True)
    modules: Optional[list[Module]] = _field(_list_of(parse_module), optional=True)
    editor_only: Optional[bool] = _field(_bool, optional=True)
    is_hidden: Optional[bool] = _field(_bool, optional=True)
    is_experimental: Optional[bool] = _field(_bool, optional=True)
    localization_targets: list[dict[str, str]] = _field(_str_maps, factory=list)
    requires_build_platform: Optional[bool] = _field(_bool, optional=True)
    can_be_used_with_unreal_header_tool: Optional[bool] = _field(_bool, optional=True)


def parse_uplugin(text: str) -> Uplugin:
    """Parse the JSON text of a ``.uplugin`` file.

    Raises ValueError when the text is not valid JSON of the right shape.
    """
    return _build(Uplugin, json.loads(text), "uplugin")


def read_uplugin(path: Union[str, Path]) -> Uplugin:
    """Read a ``.uplugin`` file.

    An unreadable file gives a default descriptor; a file that cannot be
    parsed raises ValueError.
    """
    try:
        contents = Path(path).read_text(encoding="utf-8")
    except (OSError, UnicodeDecodeError):
        return Uplugin()
    return parse_uplugin(contents)


class PluginData:
    """A plugin listed in the browser."""

    def __init__(self, path: str, name: str) -> None:
        self.path = path
        self.name = name
        self.guid: Optional[str] = None
        self.uplugin: Optional[Uplugin] = None

    def __repr__(self) -> str:
        return f"PluginData(path={self.path!r}, name={self.name!r})"