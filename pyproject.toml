[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "trayassist"
version = "0.1.0"
description = "Tool registry, structured logging, error reporting and version checks for a desktop assistant"
requires-python = ">=3.11"
dependencies = [
    "semver",
]
keywords = ["assistant", "tools", "registry", "logging", "error-reporting", "semver"]
classifiers = [
    "Development Status :: 3 - Alpha",
    "Intended Audience :: Developers",
    "Operating System :: OS Independent",
    "Framework :: AsyncIO",
    "Programming Language :: Python :: 3",
    "Programming Language :: Python :: 3 :: Only",
    "Programming Language :: Python :: 3.11",
    "Programming Language :: Python :: 3.12",
    "Programming Language :: Python :: 3.13",
    "Topic :: Utilities",
]

[project.optional-dependencies]
test = [
    "pytest",
    "pytest-asyncio",
]

[tool.hatch.build.targets.wheel]
packages = ["trayassist"]

[tool.pytest.ini_options]
testpaths = ["tests"]
addopts = "-ra"
