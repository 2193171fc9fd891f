[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "commonitems"
version = "0.1.0"
description = "Quoting helpers, script token regexes, legacy code-page conversion and Truevision Targa image reading, writing and manipulation"
requires-python = ">=3.10"
dependencies = []
keywords = ["targa", "tga", "codepage", "windows-1251", "windows-1252", "iso-8859-15", "regex", "quoting"]
classifiers = [
    "Development Status :: 4 - Beta",
    "Intended Audience :: Developers",
    "Operating System :: OS Independent",
    "Programming Language :: Python :: 3",
    "Programming Language :: Python :: 3 :: Only",
    "Programming Language :: Python :: 3.10",
    "Programming Language :: Python :: 3.11",
    "Programming Language :: Python :: 3.12",
    "Programming Language :: Python :: 3.13",
    "Topic :: Software Development :: Libraries",
    "Topic :: Multimedia :: Graphics :: Graphics Conversion",
]

[project.optional-dependencies]
test = ["pytest"]

[tool.hatch.build.targets.wheel]
packages = ["commonitems"]

[tool.pytest.ini_options]
testpaths = ["tests"]
addopts = "-ra"

[tool.ruff]
line-length = 100
target-version = "py310"

[tool.mypy]
python_version = "3.10"
