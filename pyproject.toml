[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "lambdacheck"
version = "0.1.0"
description = "Syntax tree, scope checking, currying and tree printing for a small untyped lambda-calculus language"
requires-python = ">=3.10"
dependencies = []
keywords = ["lambda calculus", "syntax tree", "scope checking", "currying", "arena", "hash map"]
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
    "Topic :: Software Development :: Interpreters",
]

[project.optional-dependencies]
test = ["pytest"]

[tool.hatch.build.targets.wheel]
packages = ["lambdacheck"]

[tool.pytest.ini_options]
addopts = "-ra"

[tool.ruff]
line-length = 100
target-version = "py310"

[tool.mypy]
python_version = "3.10"
warn_unused_ignores = true
