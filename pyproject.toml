[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "ducview"
version = "0.1.0"
description = "Presenting a disk usage index: option handling, terminal listings, JSON and XML exports, CGI pages and interactive browsing."
requires-python = ">=3.10"
dependencies = [
    "wcwidth",
]
keywords = ["disk usage", "du", "filesystem", "sunburst", "listing", "cgi", "curses"]
classifiers = [
    "Development Status :: 4 - Beta",
    "Environment :: Console",
    "Environment :: Console :: Curses",
    "Environment :: Web Environment",
    "Intended Audience :: System Administrators",
    "Operating System :: POSIX",
    "Programming Language :: Python :: 3",
    "Programming Language :: Python :: 3 :: Only",
    "Programming Language :: Python :: 3.10",
    "Programming Language :: Python :: 3.11",
    "Programming Language :: Python :: 3.12",
    "Programming Language :: Python :: 3.13",
    "Topic :: System :: Filesystems",
    "Topic :: System :: Systems Administration",
    "Topic :: Utilities",
]

[project.optional-dependencies]
test = [
    "pytest",
]

[tool.hatch.build.targets.wheel]
packages = ["ducview"]

[tool.pytest.ini_options]
testpaths = ["tests"]
addopts = "-ra"
