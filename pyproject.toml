[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "glasslink"
version = "0.1.0"
description = "SPICE wire structures, clipboard agent messages and viewer helpers for a frame-relay client"
requires-python = ">=3.10"
dependencies = []
keywords = ["spice", "kvm", "virtual-machine", "clipboard", "scancode", "keyboard", "mouse"]
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
    "Topic :: System :: Emulators",
    "Typing :: Typed",
]

[project.optional-dependencies]
test = [
    "pytest",
    "cryptography",
]

[tool.hatch.build.targets.wheel]
packages = ["glasslink"]

[tool.pytest.ini_options]
testpaths = ["tests"]
addopts = "-ra"

[tool.ruff]
line-length = 100
target-version = "py310"

[tool.mypy]
python_version = "3.10"
warn_unused_ignores = true
