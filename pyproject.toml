[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "parstastic"
version = "0.1.0"
description = "A whitespace-preserving JSON parser and stringifier with pretty and minimal output styles"
requires-python = ">=3.10"
dependencies = []
keywords = ["json", "parser", "stringify", "whitespace", "pretty-print"]
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
    "Topic :: File Formats :: JSON",
    "Topic :: Software Development :: Libraries :: Python Modules",
]

[project.optional-dependencies]
test = ["pytest"]

[tool.hatch.build.targets.wheel]
packages = ["parstastic"]

[tool.pytest.ini_options]
addopts = "-ra"
