[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "sorac"
version = "0.1.0"
description = "Building blocks for a small C-like language: token table, grammar templates, concrete syntax trees and a toy register virtual machine."
requires-python = ">=3.10"
dependencies = []
keywords = ["compiler", "tokens", "grammar", "syntax-tree", "virtual-machine", "education"]
classifiers = [
    "Development Status :: 3 - Alpha",
    "Intended Audience :: Developers",
    "Intended Audience :: Education",
    "Operating System :: OS Independent",
    "Programming Language :: Python :: 3",
    "Programming Language :: Python :: 3 :: Only",
    "Programming Language :: Python :: 3.10",
    "Programming Language :: Python :: 3.11",
    "Programming Language :: Python :: 3.12",
    "Programming Language :: Python :: 3.13",
    "Topic :: Software Development :: Compilers",
]

[project.optional-dependencies]
test = ["pytest"]

[tool.hatch.build.targets.wheel]
packages = ["sorac"]

[tool.pytest.ini_options]
testpaths = ["tests"]
addopts = "-ra"

[tool.ruff]
line-length = 100
target-version = "py310"

[tool.mypy]
python_version = "3.10"
warn_unused_ignores = true
