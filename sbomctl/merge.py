"""Merging several CycloneDX documents into one."""

from __future__ import annotations

import json
import uuid
from collections.abc import Iterable, Sequence
from dataclasses import replace
from pathlib import Path
from typing import Any

from .bom import (
    Bom,
    Component,
    ComponentType,
    Dependency,
    Metadata,
    SBOMError,
    Tool,
    ToolsChoice,
    read_sbom_file,
    write_sbom_file,
)

DEFAULT_COMPONENT_NAME = "merged-sbom"
TOOL_NAME = "sbomctl"
TOOL_VERSION = "0.1.0"


def _application(name: str, version: str, publisher: str) -> Component:
    return Component(name=name, version=version, publisher=publisher,
                     type=ComponentType.APPLICATION)


def merge_sboms(
    input_files: Iterable[str | Path],
    output_file: str | Path,
    component_name: str = "",
    component_version: str = "",
) -> Bom:
    """Merge ``input_files`` into one document, write it to ``output_file`` and return it."""
    name = component_name or DEFAULT_COMPONENT_NAME
    merged_ref = f"{name}-{uuid.uuid4()}"
    root = Component(bom_ref=merged_ref, name=name, version=component_version,
                     type=ComponentType.APPLICATION)
    tool_components = [_application(TOOL_NAME, TOOL_VERSION, TOOL_NAME)]
    merged = Bom(
        serial_number=f"urn:uuid:{uuid.uuid4()}",
        version=1,
        metadata=Metadata(tools=ToolsChoice(components=tool_components), component=root),
    )

    components: list[Component] = []
    dependencies: list[Dependency] | None = None
    metadata_components: list[Component] = []

    for path in input_files:
        try:
            bom = read_sbom_file(path)
        except SBOMError as exc:
            raise SBOMError(f"failed to read SBOM file {path}: {exc}") from exc

        serial = bom.serial_number

        def prefix(ref: str) -> str:
            return f"{serial}/{ref}" if ref and serial else ref

        metadata = bom.metadata
        tools = metadata.tools if metadata is not None else None

        if tools is not None and tools.tools is None:
            try:
                extracted = extract_tools_from_json(path)
            except SBOMError:
                extracted = []
            if extracted:
                tools.components = [*(tools.components or []), *extracted]

        if metadata is not None and metadata.component is not None:
            top = replace(metadata.component, bom_ref=prefix(metadata.component.bom_ref))
            metadata_components.append(top)
            components.append(top)

        components.extend(replace(c, bom_ref=prefix(c.bom_ref)) for c in bom.components or [])

        if bom.dependencies is not None:
            dependencies = dependencies or []
            dependencies.extend(
                replace(
                    dep,
                    ref=prefix(dep.ref),
                    depends_on=None if dep.depends_on is None
                    else [prefix(ref) for ref in dep.depends_on],
                )
                for dep in bom.dependencies
            )

        if tools is not None:
            tool_components.extend(tools.components or [])
            tool_components.extend(
                _application(t.name, t.version, t.vendor) for t in tools.tools or []
            )

    merged.components = deduplicate_components(components)
    merged.dependencies = deduplicate_dependencies(dependencies)
    merged.metadata.tools.components = deduplicate_tool_components(tool_components)

    if metadata_components:
        merged.dependencies = merged.dependencies or []
        merged.dependencies.append(
            Dependency(ref=merged_ref, depends_on=[c.bom_ref for c in metadata_components])
        )

    write_sbom_file(merged, output_file)
    return merged


def _name_version(component: Component) -> str:
    if component.version:
        return f"{component.name}@{component.version}"
    return component.name


def deduplicate_components(
    components: Sequence[Component] | None,
) -> list[Component] | None:
    """Keep the first component for each bom-ref, purl or name@version key."""
    if components is None:
        return None
    unique: dict[str, Component] = {}
    for c in components:
        unique.setdefault(c.bom_ref or c.purl or _name_version(c), c)
    return list(unique.values())


def deduplicate_dependencies(
    dependencies: Sequence[Dependency] | None,
) -> list[Dependency] | None:
    """Join dependencies with the same ref, merging their dependsOn lists."""
    if dependencies is None:
        return None
    by_ref: dict[str, Dependency] = {}
    for dep in dependencies:
        existing = by_ref.get(dep.ref)
        if existing is None:
            by_ref[dep.ref] = replace(
                dep, depends_on=None if dep.depends_on is None else list(dep.depends_on)
            )
        elif dep.depends_on:
            existing.depends_on = existing.depends_on or []
            existing.depends_on.extend(
                ref for ref in dict.fromkeys(dep.depends_on) if ref not in existing.depends_on
            )
    return list(by_ref.values())


def deduplicate_tool_components(
    components: Sequence[Component] | None,
) -> list[Component] | None:
    """Keep one application per name@version, preferring one with a publisher."""
    if components is None:
        return None
    tools: dict[str, Component] = {}
    for c in components:
        if c.type != ComponentType.APPLICATION:
            continue
        key = _name_version(c)
        existing = tools.get(key)
        if existing is None or (c.publisher and not existing.publisher):
            tools[key] = c
    return list(tools.values())


def _object(value: Any, where: str) -> dict[str, Any]:
    if value is None:
        return {}
    if not isinstance(value, dict):
        raise SBOMError(f"failed to parse JSON: {where} is not an object")
    return value


def _array(value: Any, where: str) -> list[Any]:
    if value is None:
        return []
    if not isinstance(value, list):
        raise SBOMError(f"failed to parse JSON: {where} is not an array")
    return value


def extract_tools_from_json(filename: str | Path) -> list[Component]:
    """Read ``metadata.tools`` straight from a JSON file as application components."""
    try:
        data = json.loads(Path(filename).read_bytes())
    except OSError as exc:
        raise SBOMError(f"failed to read file: {exc}") from exc
    except ValueError as exc:
        raise SBOMError(f"failed to parse JSON: {exc}") from exc

    metadata = _object(_object(data, "document").get("metadata"), "metadata")
    tools = _object(metadata.get("tools"), "metadata.tools")

    extracted = []
    for item in _array(tools.get("tools"), "metadata.tools.tools"):
        tool = Tool.from_dict(item)
        extracted.append(_application(tool.name, tool.version, tool.vendor))
    for item in _array(tools.get("components"), "metadata.tools.components"):
        comp = Component.from_dict(item)
        extracted.append(_application(comp.name, comp.version, comp.publisher or comp.group))
    return extracted