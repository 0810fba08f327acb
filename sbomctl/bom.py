"""CycloneDX bill-of-materials model with JSON reading and writing."""

from __future__ import annotations

import copy
import json
from dataclasses import dataclass, field
from enum import Enum
from pathlib import Path
from typing import Any


class SBOMError(Exception):
    """Raised when a bill of materials cannot be read, decoded or written."""


class ComponentType(str, Enum):
    """Component types defined by the CycloneDX specification."""

    APPLICATION = "application"
    CONTAINER = "container"
    CRYPTOGRAPHIC_ASSET = "cryptographic-asset"
    DATA = "data"
    DEVICE = "device"
    DEVICE_DRIVER = "device-driver"
    FILE = "file"
    FIRMWARE = "firmware"
    FRAMEWORK = "framework"
    LIBRARY = "library"
    MACHINE_LEARNING_MODEL = "machine-learning-model"
    OPERATING_SYSTEM = "operating-system"
    PLATFORM = "platform"

    def __str__(self) -> str:
        return self.value


def _expect(value: Any, kind: type, where: str) -> Any:
    if not isinstance(value, kind):
        raise SBOMError(f"{where}: expected {kind.__name__}, not {type(value).__name__}")
    return value


def _text(data: dict[str, Any], key: str, where: str) -> str:
    value = data.get(key)
    return "" if value is None else _expect(value, str, f"{where}.{key}")


def _items(data: dict[str, Any], key: str, build: Any) -> list[Any] | None:
    value = data.get(key)
    if value is None:
        return None
    return [build(item) for item in _expect(value, list, key)]


def _extra(data: dict[str, Any], known: tuple[str, ...]) -> dict[str, Any]:
    return {k: copy.deepcopy(v) for k, v in data.items() if k not in known}


def _put(out: dict[str, Any], key: str, value: Any) -> None:
    if value:
        out[key] = value


@dataclass
class Component:
    """A component; fields this tool does not use are kept in ``extra``."""

    name: str = ""
    version: str = ""
    type: ComponentType | str = ""
    bom_ref: str = ""
    publisher: str = ""
    group: str = ""
    purl: str = ""
    extra: dict[str, Any] = field(default_factory=dict)

    _KEYS = ("bom-ref", "type", "publisher", "group", "name", "version", "purl")

    @classmethod
    def from_dict(cls, data: Any) -> Component:
        data = _expect(data, dict, "component")
        kind = _text(data, "type", "component")
        try:
            kind = ComponentType(kind)
        except ValueError:
            pass
        return cls(
            name=_text(data, "name", "component"),
            version=_text(data, "version", "component"),
            type=kind,
            bom_ref=_text(data, "bom-ref", "component"),
            publisher=_text(data, "publisher", "component"),
            group=_text(data, "group", "component"),
            purl=_text(data, "purl", "component"),
            extra=_extra(data, cls._KEYS),
        )

    def to_dict(self) -> dict[str, Any]:
        out: dict[str, Any] = {}
        _put(out, "bom-ref", self.bom_ref)
        out["type"] = str(self.type)
        _put(out, "publisher", self.publisher)
        _put(out, "group", self.group)
        out["name"] = self.name
        _put(out, "version", self.version)
        _put(out, "purl", self.purl)
        out.update(copy.deepcopy(self.extra))
        return out


@dataclass
class Tool:
    """A tool entry in the legacy array form of ``metadata.tools``."""

    name: str = ""
    version: str = ""
    vendor: str = ""
    extra: dict[str, Any] = field(default_factory=dict)

    @classmethod
    def from_dict(cls, data: Any) -> Tool:
        data = _expect(data, dict, "tool")
        return cls(
            name=_text(data, "name", "tool"),
            version=_text(data, "version", "tool"),
            vendor=_text(data, "vendor", "tool"),
            extra=_extra(data, ("vendor", "name", "version")),
        )

    def to_dict(self) -> dict[str, Any]:
        out: dict[str, Any] = {}
        _put(out, "vendor", self.vendor)
        _put(out, "name", self.name)
        _put(out, "version", self.version)
        out.update(copy.deepcopy(self.extra))
        return out


@dataclass
class ToolsChoice:
    """``metadata.tools``: either a legacy tool list or components and services."""

    tools: list[Tool] | None = None
    components: list[Component] | None = None
    services: list[Any] | None = None

    @classmethod
    def from_dict(cls, data: Any) -> ToolsChoice:
        if isinstance(data, list):
            return cls(tools=[Tool.from_dict(item) for item in data])
        data = _expect(data, dict, "tools")
        return cls(
            components=_items(data, "components", Component.from_dict),
            services=_items(data, "services", copy.deepcopy),
        )

    def to_dict(self) -> list[dict[str, Any]] | dict[str, Any]:
        if self.tools is not None:
            if self.components is not None or self.services is not None:
                raise SBOMError("tools must be either a legacy tool list or components and services")
            return [tool.to_dict() for tool in self.tools]
        out: dict[str, Any] = {}
        if self.components is not None:
            out["components"] = [c.to_dict() for c in self.components]
        if self.services is not None:
            out["services"] = copy.deepcopy(self.services)
        return out


@dataclass
class Metadata:
    """Document metadata."""

    timestamp: str = ""
    tools: ToolsChoice | None = None
    component: Component | None = None
    extra: dict[str, Any] = field(default_factory=dict)

    @classmethod
    def from_dict(cls, data: Any) -> Metadata:
        data = _expect(data, dict, "metadata")
        tools, component = data.get("tools"), data.get("component")
        return cls(
            timestamp=_text(data, "timestamp", "metadata"),
            tools=None if tools is None else ToolsChoice.from_dict(tools),
            component=None if component is None else Component.from_dict(component),
            extra=_extra(data, ("timestamp", "tools", "component")),
        )

    def to_dict(self) -> dict[str, Any]:
        out: dict[str, Any] = {}
        _put(out, "timestamp", self.timestamp)
        if self.tools is not None:
            out["tools"] = self.tools.to_dict()
        if self.component is not None:
            out["component"] = self.component.to_dict()
        out.update(copy.deepcopy(self.extra))
        return out


@dataclass
class Dependency:
    """A dependency-graph node: ``ref`` and the refs it depends on."""

    ref: str = ""
    depends_on: list[str] | None = None
    extra: dict[str, Any] = field(default_factory=dict)

    @classmethod
    def from_dict(cls, data: Any) -> Dependency:
        data = _expect(data, dict, "dependency")
        return cls(
            ref=_text(data, "ref", "dependency"),
            depends_on=_items(data, "dependsOn", lambda ref: _expect(ref, str, "dependsOn")),
            extra=_extra(data, ("ref", "dependsOn")),
        )

    def to_dict(self) -> dict[str, Any]:
        out: dict[str, Any] = {"ref": self.ref}
        if self.depends_on is not None:
            out["dependsOn"] = list(self.depends_on)
        out.update(copy.deepcopy(self.extra))
        return out


@dataclass
class Bom:
    """A CycloneDX bill of materials."""

    bom_format: str = "CycloneDX"
    spec_version: str = "1.6"
    serial_number: str = ""
    version: int = 1
    metadata: Metadata | None = None
    components: list[Component] | None = None
    dependencies: list[Dependency] | None = None
    extra: dict[str, Any] = field(default_factory=dict)

    _KEYS = ("bomFormat", "specVersion", "serialNumber", "version",
             "metadata", "components", "dependencies")

    @classmethod
    def from_dict(cls, data: Any) -> Bom:
        data = _expect(data, dict, "document")
        version = data.get("version", 0)
        if version is None:
            version = 0
        if isinstance(version, bool) or not isinstance(version, int):
            raise SBOMError("document: field 'version' must be an integer")
        metadata = data.get("metadata")
        return cls(
            bom_format=_text(data, "bomFormat", "document"),
            spec_version=_text(data, "specVersion", "document"),
            serial_number=_text(data, "serialNumber", "document"),
            version=version,
            metadata=None if metadata is None else Metadata.from_dict(metadata),
            components=_items(data, "components", Component.from_dict),
            dependencies=_items(data, "dependencies", Dependency.from_dict),
            extra=_extra(data, cls._KEYS),
        )

    def to_dict(self) -> dict[str, Any]:
        out: dict[str, Any] = {"bomFormat": self.bom_format, "specVersion": self.spec_version}
        _put(out, "serialNumber", self.serial_number)
        out["version"] = self.version
        if self.metadata is not None:
            out["metadata"] = self.metadata.to_dict()
        if self.components is not None:
            out["components"] = [c.to_dict() for c in self.components]
        if self.dependencies is not None:
            out["dependencies"] = [d.to_dict() for d in self.dependencies]
        out.update(copy.deepcopy(self.extra))
        return out


def read_sbom_file(filename: str | Path) -> Bom:
    """Read a CycloneDX JSON document from ``filename``."""
    try:
        raw = Path(filename).read_bytes()
    except OSError as exc:
        raise SBOMError(f"failed to open file: {exc}") from exc
    try:
        return Bom.from_dict(json.loads(raw))
    except (ValueError, SBOMError) as exc:
        raise SBOMError(f"failed to decode BOM: {exc}") from exc


def write_sbom_file(bom: Bom, filename: str | Path) -> None:
    """Write ``bom`` to ``filename`` as indented JSON."""
    try:
        text = json.dumps(bom.to_dict(), indent=2, ensure_ascii=False) + "\n"
    except SBOMError as exc:
        raise SBOMError(f"failed to encode BOM: {exc}") from exc
    try:
        Path(filename).write_text(text, encoding="utf-8")
    except OSError as exc:
        raise SBOMError(f"failed to create output file: {exc}") from exc