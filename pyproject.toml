[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "watchstock"
version = "0.1.0"
description = "Inventory tracking for watch products, components, orders and assembly, with a JSON HTTP API"
requires-python = ">=3.10"
keywords = ["inventory", "watches", "components", "orders", "lmdb", "flask", "api"]
classifiers = [
    "Development Status :: 3 - Alpha",
    "Environment :: Web Environment",
    "Framework :: Flask",
    "Intended Audience :: Manufacturing",
    "Operating System :: OS Independent",
    "Programming Language :: Python :: 3",
    "Programming Language :: Python :: 3 :: Only",
    "Programming Language :: Python :: 3.10",
    "Programming Language :: Python :: 3.11",
    "Programming Language :: Python :: 3.12",
    "Programming Language :: Python :: 3.13",
    "Topic :: Office/Business",
]
dependencies = [
    "lmdb",
    "flask",
]

[project.optional-dependencies]
test = [
    "pytest",
]

[project.scripts]
watchstock = "watchstock.cli:main"

[tool.hatch.build.targets.wheel]
packages = ["watchstock"]

[tool.pytest.ini_options]
testpaths = ["tests"]
addopts = "-ra"
