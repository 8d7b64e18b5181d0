"""Configuration of the JavaScript compatibility layer."""

from __future__ import annotations

import json
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any


class ConfigError(Exception):
    """The configuration file could not be read or parsed."""


def _get(data: dict[str, Any], key: str) -> Any:
    if key in data:
        return data[key]
    lowered = key.lower()
    for name, value in data.items():
        if name.lower() == lowered:
            return value
    return None


def _object(value: Any, where: str) -> dict[str, Any]:
    if value is None:
        return {}
    if not isinstance(value, dict):
        raise ConfigError(f"{where}: expected an object")
    return value


def _bool(data: dict[str, Any], key: str) -> bool:
    value = _get(data, key)
    if value is None:
        return False
    if not isinstance(value, bool):
        raise ConfigError(f"{key}: expected a boolean")
    return value


def _int(data: dict[str, Any], key: str) -> int:
    value = _get(data, key)
    if value is None:
        return 0
    if isinstance(value, bool) or not isinstance(value, int):
        raise ConfigError(f"{key}: expected an integer")
    return value


def _str(data: dict[str, Any], key: str) -> str:
    value = _get(data, key)
    if value is None:
        return ""
    if not isinstance(value, str):
        raise ConfigError(f"{key}: expected a string")
    return value


def _str_list(data: dict[str, Any], key: str) -> list[str]:
    value = _get(data, key)
    if value is None:
        return []
    if not isinstance(value, list) or not all(isinstance(v, str) for v in value):
        raise ConfigError(f"{key}: expected a list of strings")
    return list(value)


def _sub(data: dict[str, Any], key: str) -> dict[str, Any]:
    return _object(_get(data, key), key)


@dataclass
class ConsoleCategory:
    enabled: bool = False
    methods: list[str] = field(default_factory=list)

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> ConsoleCategory:
        return cls(_bool(data, "enabled"), _str_list(data, "methods"))


@dataclass
class DomMethods:
    document: list[str] = field(default_factory=list)
    element: list[str] = field(default_factory=list)
    class_list: list[str] = field(default_factory=list)
    parent_node: list[str] = field(default_factory=list)

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> DomMethods:
        return cls(
            _str_list(data, "document"),
            _str_list(data, "element"),
            _str_list(data, "classList"),
            _str_list(data, "parentNode"),
        )


@dataclass
class DomCategory:
    enabled: bool = False
    methods: DomMethods = field(default_factory=DomMethods)

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> DomCategory:
        return cls(_bool(data, "enabled"), DomMethods.from_dict(_sub(data, "methods")))


@dataclass
class Location:
    protocol: str = ""
    host: str = ""
    pathname: str = ""

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> Location:
        return cls(_str(data, "protocol"), _str(data, "host"), _str(data, "pathname"))


@dataclass
class WindowConfig:
    location: Location = field(default_factory=Location)
    methods: list[str] = field(default_factory=list)

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> WindowConfig:
        return cls(Location.from_dict(_sub(data, "location")), _str_list(data, "methods"))


@dataclass
class NavigatorConfig:
    user_agent: str = ""

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> NavigatorConfig:
        return cls(_str(data, "userAgent"))


@dataclass
class BrowserCategory:
    enabled: bool = False
    window: WindowConfig = field(default_factory=WindowConfig)
    navigator: NavigatorConfig = field(default_factory=NavigatorConfig)

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> BrowserCategory:
        return cls(
            _bool(data, "enabled"),
            WindowConfig.from_dict(_sub(data, "window")),
            NavigatorConfig.from_dict(_sub(data, "navigator")),
        )


@dataclass
class StorageMethods:
    methods: list[str] = field(default_factory=list)

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> StorageMethods:
        return cls(_str_list(data, "methods"))


@dataclass
class StorageCategory:
    enabled: bool = False
    local_storage: StorageMethods = field(default_factory=StorageMethods)
    session_storage: StorageMethods = field(default_factory=StorageMethods)

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> StorageCategory:
        return cls(
            _bool(data, "enabled"),
            StorageMethods.from_dict(_sub(data, "localStorage")),
            StorageMethods.from_dict(_sub(data, "sessionStorage")),
        )


@dataclass
class MatchMediaConfig:
    enabled: bool = False
    properties: list[str] = field(default_factory=list)
    methods: list[str] = field(default_factory=list)

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> MatchMediaConfig:
        return cls(
            _bool(data, "enabled"),
            _str_list(data, "properties"),
            _str_list(data, "methods"),
        )


@dataclass
class CustomEventConfig:
    enabled: bool = False
    properties: list[str] = field(default_factory=list)

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> CustomEventConfig:
        return cls(_bool(data, "enabled"), _str_list(data, "properties"))


@dataclass
class UrlSearchParamsConfig:
    enabled: bool = False
    methods: list[str] = field(default_factory=list)

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> UrlSearchParamsConfig:
        return cls(_bool(data, "enabled"), _str_list(data, "methods"))


@dataclass
class WebApiCategory:
    enabled: bool = False
    match_media: MatchMediaConfig = field(default_factory=MatchMediaConfig)
    custom_event: CustomEventConfig = field(default_factory=CustomEventConfig)
    url_search_params: UrlSearchParamsConfig = field(default_factory=UrlSearchParamsConfig)

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> WebApiCategory:
        return cls(
            _bool(data, "enabled"),
            MatchMediaConfig.from_dict(_sub(data, "matchMedia")),
            CustomEventConfig.from_dict(_sub(data, "CustomEvent")),
            UrlSearchParamsConfig.from_dict(_sub(data, "URLSearchParams")),
        )


@dataclass
class JQueryConfig:
    enabled: bool = False
    methods: list[str] = field(default_factory=list)
    properties: list[str] = field(default_factory=list)

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> JQueryConfig:
        return cls(
            _bool(data, "enabled"),
            _str_list(data, "methods"),
            _str_list(data, "properties"),
        )


@dataclass
class FrameworksCategory:
    enabled: bool = False
    jquery: JQueryConfig = field(default_factory=JQueryConfig)

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> FrameworksCategory:
        return cls(_bool(data, "enabled"), JQueryConfig.from_dict(_sub(data, "jquery")))


@dataclass
class SiteGlobal:
    enabled: bool = False
    description: str = ""

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> SiteGlobal:
        return cls(_bool(data, "enabled"), _str(data, "description"))


@dataclass
class SiteSpecificCategory:
    enabled: bool = False
    globals: dict[str, SiteGlobal] = field(default_factory=dict)

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> SiteSpecificCategory:
        raw = _sub(data, "globals")
        return cls(
            _bool(data, "enabled"),
            {name: SiteGlobal.from_dict(_object(value, name)) for name, value in raw.items()},
        )


@dataclass
class Categories:
    console: ConsoleCategory = field(default_factory=ConsoleCategory)
    dom: DomCategory = field(default_factory=DomCategory)
    browser: BrowserCategory = field(default_factory=BrowserCategory)
    storage: StorageCategory = field(default_factory=StorageCategory)
    webapi: WebApiCategory = field(default_factory=WebApiCategory)
    frameworks: FrameworksCategory = field(default_factory=FrameworksCategory)
    site_specific: SiteSpecificCategory = field(default_factory=SiteSpecificCategory)

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> Categories:
        return cls(
            ConsoleCategory.from_dict(_sub(data, "console")),
            DomCategory.from_dict(_sub(data, "dom")),
            BrowserCategory.from_dict(_sub(data, "browser")),
            StorageCategory.from_dict(_sub(data, "storage")),
            WebApiCategory.from_dict(_sub(data, "webapi")),
            FrameworksCategory.from_dict(_sub(data, "frameworks")),
            SiteSpecificCategory.from_dict(_sub(data, "site_specific")),
        )


@dataclass
class JavaScriptCompatibility:
    enabled: bool = False
    timeout_seconds: int = 0
    max_execution_time_seconds: int = 0
    categories: Categories = field(default_factory=Categories)

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> JavaScriptCompatibility:
        return cls(
            _bool(data, "enabled"),
            _int(data, "timeout_seconds"),
            _int(data, "max_execution_time_seconds"),
            Categories.from_dict(_sub(data, "categories")),
        )


@dataclass
class JSConfig:
    """Top-level JavaScript compatibility configuration."""

    javascript_compatibility: JavaScriptCompatibility = field(
        default_factory=JavaScriptCompatibility
    )

    @classmethod
    def from_dict(cls, data: Any) -> JSConfig:
        root = _object(data, "configuration")
        return cls(
            JavaScriptCompatibility.from_dict(_sub(root, "javascript_compatibility"))
        )


def load_js_config(config_path: str | Path) -> JSConfig:
    """Read a JSON configuration file; raises ConfigError on failure."""
    try:
        text = Path(config_path).read_text(encoding="utf-8")
    except (OSError, UnicodeDecodeError) as exc:
        raise ConfigError(f"failed to read config file: {exc}") from exc
    try:
        data = json.loads(text)
    except json.JSONDecodeError as exc:
        raise ConfigError(f"failed to parse config JSON: {exc}") from exc
    try:
        return JSConfig.from_dict(data)
    except ConfigError as exc:
        raise ConfigError(f"failed to parse config JSON: {exc}") from exc


def load_default_js_config() -> JSConfig:
    """Configuration used when no file can be loaded."""
    return JSConfig(
        JavaScriptCompatibility(
            enabled=True,
            timeout_seconds=2,
            max_execution_time_seconds=3,
            categories=Categories(
                console=ConsoleCategory(enabled=True, methods=["log"]),
                dom=DomCategory(enabled=True),
                browser=BrowserCategory(enabled=True),
                storage=StorageCategory(enabled=True),
                webapi=WebApiCategory(enabled=True),
                frameworks=FrameworksCategory(enabled=True),
                site_specific=SiteSpecificCategory(enabled=True),
            ),
        )
    )