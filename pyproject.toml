[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "corvid"
version = "0.1.0"
description = "Building blocks for small HTTP servers: cookie handling, mustache template parsing, SHA-1, base64 and filename helpers"
requires-python = ">=3.10"
dependencies = []
keywords = ["http", "cookies", "mustache", "sha1", "base64", "web"]
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
    "Topic :: Internet :: WWW/HTTP :: HTTP Servers",
    "Topic :: Software Development :: Libraries :: Python Modules",
]

[project.optional-dependencies]
test = ["pytest"]

[tool.hatch.build.targets.wheel]
packages = ["corvid"]

[tool.pytest.ini_options]
testpaths = ["tests"]
addopts = "-ra"
