[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "pagc"
version = "0.1.0"
description = "Building blocks for publicly auditable garbled-circuit two-party computation: Bristol Fashion circuits, GGM vector commitments and VOLE-in-the-head AND checks"
requires-python = ">=3.10"
keywords = [
    "garbled circuits",
    "secure computation",
    "vole-in-the-head",
    "vector commitment",
    "bristol fashion",
    "blake3",
]
classifiers = [
    "Development Status :: 3 - Alpha",
    "Intended Audience :: Science/Research",
    "Intended Audience :: Developers",
    "Programming Language :: Python :: 3",
    "Programming Language :: Python :: 3 :: Only",
    "Programming Language :: Python :: 3.10",
    "Programming Language :: Python :: 3.11",
    "Programming Language :: Python :: 3.12",
    "Programming Language :: Python :: 3.13",
    "Topic :: Security :: Cryptography",
]
dependencies = [
    "cryptography",
]

[project.optional-dependencies]
test = [
    "pytest",
]

[tool.hatch.build.targets.wheel]
packages = ["pagc"]

[tool.pytest.ini_options]
testpaths = ["tests"]
addopts = "-ra"

[tool.ruff]
line-length = 100
target-version = "py310"

[tool.mypy]
python_version = "3.10"
