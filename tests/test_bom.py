import json

import pytest

from sbomctl.bom import (
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


def _sample_bom():
    return Bom(
        serial_number="urn:uuid:test-uuid",
        version=1,
        metadata=Metadata(
            timestamp="2023-01-01T12:00:00Z",
            tools=ToolsChoice(
                components=[
                    Component(
                        bom_ref="test-tool",
                        name="Test Tool",
                        version="1.0.0",
                        publisher="Test Vendor",
                        type=ComponentType.APPLICATION,
                    )
                ]
            ),
        ),
        components=[
            Component(
                bom_ref="pkg:npm/library-component@1.0.0",
                name="library-component",
                version="1.0.0",
                type=ComponentType.LIBRARY,
                purl="pkg:npm/library-component@1.0.0",
            )
        ],
        dependencies=[
            Dependency(
                ref="pkg:npm/library-component@1.0.0",
                depends_on=["pkg:npm/framework-component@2.0.0"],
            )
        ],
    )


def test_component_round_trip_keeps_extra_fields():
    component = Component(
        name="component-a",
        version="1.0.0",
        type=ComponentType.LIBRARY,
        bom_ref="component-a",
        group="group-a",
        extra={"description": "something", "hashes": [{"alg": "SHA-256"}]},
    )
    assert Component.from_dict(component.to_dict()) == component


def test_component_uses_spec_key_names():
    data = Component(name="foo", bom_ref="ref-1", purl="pkg:npm/foo@1.0.0").to_dict()
    assert data["bom-ref"] == "ref-1"
    assert data["purl"] == "pkg:npm/foo@1.0.0"
    assert data["name"] == "foo"


def test_known_component_type_becomes_enum():
    component = Component.from_dict({"type": "library", "name": "a"})
    assert component.type is ComponentType.LIBRARY
    assert component.to_dict()["type"] == "library"


def test_unknown_component_type_is_kept():
    component = Component.from_dict({"type": "widget", "name": "a"})
    assert component.type == "widget"
    assert component.to_dict()["type"] == "widget"


def test_component_rejects_non_string_field():
    with pytest.raises(SBOMError):
        Component.from_dict({"name": 5})


def test_legacy_tool_list_is_parsed():
    choice = ToolsChoice.from_dict([{"vendor": "Vendor A", "name": "Tool A", "version": "1.0.0"}])
    assert choice.tools == [Tool(name="Tool A", version="1.0.0", vendor="Vendor A")]
    assert choice.components is None
    assert choice.to_dict() == [{"vendor": "Vendor A", "name": "Tool A", "version": "1.0.0"}]


def test_object_tools_round_trip():
    choice = ToolsChoice(
        components=[Component(name="trivy", version="0.61.0", publisher="aquasecurity")]
    )
    data = choice.to_dict()
    assert isinstance(data, dict)
    assert ToolsChoice.from_dict(data) == choice


def test_tools_with_both_forms_cannot_be_encoded():
    choice = ToolsChoice(tools=[Tool(name="Tool A")], components=[Component(name="Tool B")])
    with pytest.raises(SBOMError):
        choice.to_dict()


def test_tools_must_be_list_or_object():
    with pytest.raises(SBOMError):
        ToolsChoice.from_dict("trivy")


def test_dependency_without_depends_on():
    dependency = Dependency.from_dict({"ref": "component-a"})
    assert dependency.depends_on is None
    assert dependency.to_dict() == {"ref": "component-a"}


def test_dependency_round_trip():
    dependency = Dependency(ref="component-a", depends_on=["component-b", "component-c"])
    assert Dependency.from_dict(dependency.to_dict()) == dependency


def test_dependency_rejects_non_string_refs():
    with pytest.raises(SBOMError):
        Dependency.from_dict({"ref": "a", "dependsOn": [1]})


def test_default_bom_document():
    data = Bom().to_dict()
    assert data["bomFormat"] == "CycloneDX"
    assert data["version"] == 1
    assert "serialNumber" not in data
    assert "components" not in data


def test_bom_dict_round_trip():
    bom = _sample_bom()
    bom.extra = {"externalReferences": [{"type": "website", "url": "https://example.com"}]}
    assert Bom.from_dict(bom.to_dict()) == bom


def test_metadata_keeps_unknown_fields():
    metadata = Metadata.from_dict({"timestamp": "2023-01-01T12:00:00Z", "lifecycles": [1]})
    assert metadata.extra == {"lifecycles": [1]}
    assert metadata.to_dict()["lifecycles"] == [1]


def test_bom_rejects_non_object():
    with pytest.raises(SBOMError):
        Bom.from_dict([1, 2])


def test_bom_rejects_non_integer_version():
    with pytest.raises(SBOMError):
        Bom.from_dict({"version": "1"})


def test_file_round_trip(tmp_path):
    path = tmp_path / "sbom.json"
    bom = _sample_bom()
    write_sbom_file(bom, path)
    assert read_sbom_file(path) == bom


def test_written_file_is_indented_json(tmp_path):
    path = tmp_path / "sbom.json"
    write_sbom_file(_sample_bom(), path)
    text = path.read_text(encoding="utf-8")
    assert text.endswith("\n")
    assert '\n  "bomFormat": "CycloneDX"' in text
    assert json.loads(text)["serialNumber"] == "urn:uuid:test-uuid"


def test_read_missing_file(tmp_path):
    with pytest.raises(SBOMError, match="failed to open file"):
        read_sbom_file(tmp_path / "missing.json")


def test_read_invalid_json(tmp_path):
    path = tmp_path / "broken.json"
    path.write_text("{not json", encoding="utf-8")
    with pytest.raises(SBOMError, match="failed to decode BOM"):
        read_sbom_file(path)


def test_write_conflicting_tools_fails(tmp_path):
    bom = Bom(
        metadata=Metadata(
            tools=ToolsChoice(tools=[Tool(name="a")], components=[Component(name="b")])
        )
    )
    with pytest.raises(SBOMError, match="failed to encode BOM"):
        write_sbom_file(bom, tmp_path / "out.json")