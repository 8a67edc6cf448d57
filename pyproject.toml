[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "schemacoerce"
version = "0.1.0"
description = "JSON Schema node model with path queries, validation and schema-to-schema value coercions"
requires-python = ">=3.10"
dependencies = [
    "jsonschema",
]
keywords = ["json", "json-schema", "schema", "coercion", "validation", "query"]
classifiers = [
    "Development Status :: 3 - Alpha",
    "Intended Audience :: Developers",
    "Operating System :: OS Independent",
    "Programming Language :: Python :: 3",
    "Programming Language :: Python :: 3 :: Only",
    "Programming Language :: Python :: 3.10",
    "Programming Language :: Python :: 3.11",
    "Programming Language :: Python :: 3.12",
    "Programming Language :: Python :: 3.13",
    "Topic :: File Formats :: JSON :: JSON Schema",
    "Topic :: Software Development :: Libraries :: Python Modules",
]

[project.optional-dependencies]
test = [
    "pytest",
]

[tool.hatch.build.targets.wheel]
packages = ["schemacoerce"]

[tool.pytest.ini_options]
testpaths = ["tests"]
addopts = "-ra"
