[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "sbomctl"
version = "0.1.0"
description = "Inspect and merge CycloneDX software bills of materials (SBOMs) in JSON format"
requires-python = ">=3.10"
dependencies = []
keywords = ["sbom", "cyclonedx", "software bill of materials", "supply chain", "merge"]
classifiers = [
    "Development Status :: 3 - Alpha",
    "Environment :: Console",
    "Intended Audience :: Developers",
    "Intended Audience :: System Administrators",
    "Operating System :: OS Independent",
    "Programming Language :: Python :: 3",
    "Programming Language :: Python :: 3 :: Only",
    "Programming Language :: Python :: 3.10",
    "Programming Language :: Python :: 3.11",
    "Programming Language :: Python :: 3.12",
    "Programming Language :: Python :: 3.13",
    "Topic :: Software Development :: Quality Assurance",
]

[project.optional-dependencies]
test = ["pytest"]

[project.scripts]
sbomctl = "sbomctl.cli:main"

[tool.hatch.build.targets.wheel]
packages = ["sbomctl"]

[tool.pytest.ini_options]
testpaths = ["tests"]
addopts = "-ra"
