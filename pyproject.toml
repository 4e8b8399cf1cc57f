[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "witkit"
version = "0.1.0"
description = "Data model, Canonical ABI sizing and WIT text rendering for WebAssembly Interface Type packages"
requires-python = ">=3.10"
dependencies = ["semver"]
keywords = ["wasm", "webassembly", "wit", "component-model", "canonical-abi"]
classifiers = [
    "Development Status :: 3 - Alpha",
    "Intended Audience :: Developers",
    "Programming Language :: Python :: 3",
    "Programming Language :: Python :: 3 :: Only",
    "Programming Language :: Python :: 3.10",
    "Programming Language :: Python :: 3.11",
    "Programming Language :: Python :: 3.12",
    "Programming Language :: Python :: 3.13",
    "Operating System :: OS Independent",
    "Topic :: Software Development :: Libraries",
]

[project.optional-dependencies]
test = ["pytest"]

[tool.hatch.build.targets.wheel]
packages = ["witkit"]

[tool.pytest.ini_options]
testpaths = ["tests"]
addopts = "-ra"
