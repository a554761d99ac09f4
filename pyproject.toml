[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "labkit"
version = "0.1.0"
description = "Unix V6 disk image reader, an ARM simulator shell, a typed string list, and process ring and pipeline tools"
requires-python = ">=3.10"
dependencies = []
keywords = [
    "unix-v6",
    "filesystem",
    "disk-image",
    "inode",
    "checksum",
    "simulator",
    "arm",
    "pipeline",
    "shell",
]
classifiers = [
    "Development Status :: 4 - Beta",
    "Environment :: Console",
    "Intended Audience :: Education",
    "Intended Audience :: Developers",
    "Operating System :: POSIX",
    "Programming Language :: Python :: 3",
    "Programming Language :: Python :: 3 :: Only",
    "Programming Language :: Python :: 3.10",
    "Programming Language :: Python :: 3.11",
    "Programming Language :: Python :: 3.12",
    "Programming Language :: Python :: 3.13",
    "Topic :: System :: Filesystems",
    "Topic :: System :: Emulators",
    "Topic :: System :: Shells",
    "Topic :: Education",
]

[project.optional-dependencies]
test = ["pytest"]

[project.scripts]
diskimageaccess = "labkit.v6fs.cli:main"
arm-sim = "labkit.armsim.shell:main"
strlist-report = "labkit.strlist.report:main"
ring = "labkit.procs.ring:main"
labkit-shell = "labkit.procs.pipeline:main"

[tool.hatch.build.targets.wheel]
packages = ["labkit"]

[tool.hatch.build.targets.sdist]
include = ["labkit", "tests", "README.md", "pyproject.toml"]

[tool.pytest.ini_options]
addopts = "-ra"
testpaths = ["tests"]
