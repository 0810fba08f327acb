# sbomctl

A small command-line tool and library for working with Software Bills of
Materials (SBOMs) in the CycloneDX JSON format. It has no dependencies
beyond the standard library.

## Installation

```
pip install .
```

To run the tests:

```
pip install ".[test]"
pytest
```

## Commands

Running `sbomctl` with no command prints the help. Errors are printed to
standard error and the command exits with status 1.

### inspect

Shows a summary of one SBOM file, laid out in aligned columns:

- file name, `bomFormat`, `specVersion`, serial number and version;
- metadata timestamp and tools (both the older tool list and the
  component form), if the file has metadata;
- the total number of components and a count per component type;
- up to ten components sorted by name (case-insensitively), with version,
  type and package URL, and how many more there are;
- the number of dependency entries, how many of them have a non-empty
  `dependsOn`, and the largest `dependsOn` count.

```
sbomctl inspect sbom.json
```

### merge

Merges two or more SBOM files into one and prints a line saying so.

```
sbomctl merge sbom1.sbom.json sbom2.sbom.json -o merged.sbom.json
```

Options:

- `-o`, `--output` — output file (default `merged.sbom.json`)
- `--merged-component-name` — name of the component placed in the merged
  SBOM's `metadata.component` (default `merged-sbom`)
- `--merged-component-version` — version of that component (default: none)

How merging works:

- The merged document gets a fresh `urn:uuid:` serial number, version 1 and
  a `metadata.component` of type `application` whose `bom-ref` is the
  component name followed by a random UUID.
- When an input has a serial number, the `bom-ref` of each of its
  components and the `ref` and `dependsOn` entries of its dependencies are
  prefixed with it (`<serial>/<ref>`), so refs from different files do not
  collide.
- Each input's `metadata.component` is added to the merged component list,
  and a dependency entry is added making the merged component depend on all
  of them.
- Duplicate components are removed, keeping the first, keyed by `bom-ref`,
  then package URL, then `name@version`.
- Dependencies with the same ref are combined and their `dependsOn` lists
  joined without repeats.
- Tools from every input, in both the component form and the older tool
  list form, are collected into `metadata.tools.components` together with
  an entry for `sbomctl` itself. They are de-duplicated by `name@version`,
  preferring an entry that names a publisher; only `application`
  components are kept.

Fields of the input documents that the tool does not work with (for
example licenses or hashes on components) are carried through unchanged.

## Library use

```python
from sbomctl.bom import read_sbom_file, write_sbom_file, SBOMError
from sbomctl.inspect import align_columns, format_sbom_info
from sbomctl.merge import merge_sboms

merged = merge_sboms(["a.json", "b.json"], "merged.json", "my-app", "1.0.0")

bom = read_sbom_file("merged.json")
print(align_columns(format_sbom_info(bom, "merged.json"), 2), end="")
```

- `sbomctl.bom` holds the document model (`Bom`, `Metadata`, `ToolsChoice`,
  `Tool`, `Component`, `ComponentType`, `Dependency`), each with
  `from_dict` and `to_dict`, plus `read_sbom_file` and `write_sbom_file`.
  Read and write failures raise `SBOMError`.
- `sbomctl.merge` provides `merge_sboms`, which writes the merged document
  and also returns it, and the helpers `deduplicate_components`,
  `deduplicate_dependencies`, `deduplicate_tool_components` and
  `extract_tools_from_json`.
- `sbomctl.inspect` provides `format_sbom_info`, which returns the summary
  as tab-separated text, and `align_columns`, which turns that text into
  space-padded columns.

## Limitations

- Only the JSON form of CycloneDX is read and written; XML documents are
  not supported.
- Documents are not validated against the CycloneDX schema, and the spec
  version of the inputs is not checked or converted. Merged documents are
  written with `specVersion` 1.6.
- There are no commands other than `inspect` and `merge` (no diffing,
  filtering or conversion).