[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "plugview"
version = "0.1.0"
description = "Protocol types, view builders, tree selectors and authoring interfaces for server-rendered UI plugins"
requires-python = ">=3.10"
keywords = ["plugins", "ui", "view-tree", "selectors", "transforms", "ed25519"]
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
    "Topic :: Software Development :: Libraries :: Application Frameworks",
]
dependencies = [
    "cryptography",
]

[project.optional-dependencies]
test = [
    "pytest",
]

[tool.hatch.build.targets.wheel]
packages = ["plugview"]

[tool.pytest.ini_options]
testpaths = ["tests"]
addopts = "-ra"
