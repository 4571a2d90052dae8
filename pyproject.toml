[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "shellparse"
version = "0.1.0"
description = "Tokenizer, variable expander, syntax checker and pipeline builder for a small POSIX-like shell"
requires-python = ">=3.10"
dependencies = []
keywords = ["shell", "tokenizer", "parser", "lexer", "heredoc", "expansion"]
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
    "Topic :: System :: Shells",
    "Topic :: Software Development :: Libraries :: Python Modules",
]

[project.optional-dependencies]
test = ["pytest"]

[tool.hatch.build.targets.wheel]
packages = ["shellparse"]

[tool.pytest.ini_options]
testpaths = ["tests"]
addopts = "-ra"
