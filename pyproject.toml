[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "nixlens"
version = "0.1.0"
description = "Language-server building blocks for the Nix expression language: syntax trees, lookup results, symbols, semantic tokens, hover and rename."
requires-python = ">=3.10"
dependencies = []
keywords = ["nix", "language-server", "lsp", "ast", "semantic-tokens"]
classifiers = [
    "Development Status :: 3 - Alpha",
    "Intended Audience :: Developers",
    "Operating System :: POSIX",
    "Programming Language :: Python :: 3",
    "Programming Language :: Python :: 3 :: Only",
    "Programming Language :: Python :: 3.10",
    "Programming Language :: Python :: 3.11",
    "Programming Language :: Python :: 3.12",
    "Programming Language :: Python :: 3.13",
    "Topic :: Software Development :: Libraries :: Python Modules",
]

[project.optional-dependencies]
test = ["pytest"]

[tool.hatch.build.targets.wheel]
packages = ["nixlens"]

[tool.pytest.ini_options]
testpaths = ["tests"]
addopts = "-ra"

[tool.ruff]
line-length = 88
target-version = "py310"

[tool.mypy]
python_version = "3.10"
