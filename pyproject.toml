[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "filedepot"
version = "0.1.0"
description = "A small per-user file depot: an HTTP/JSON server with accounts and directories, and an interactive shell client"
requires-python = ">=3.10"
keywords = ["file server", "http", "json", "shell", "remote directories"]
classifiers = [
    "Development Status :: 3 - Alpha",
    "Environment :: Console",
    "Intended Audience :: End Users/Desktop",
    "Intended Audience :: System Administrators",
    "Operating System :: POSIX",
    "Programming Language :: Python :: 3",
    "Programming Language :: Python :: 3 :: Only",
    "Programming Language :: Python :: 3.10",
    "Programming Language :: Python :: 3.11",
    "Programming Language :: Python :: 3.12",
    "Programming Language :: Python :: 3.13",
    "Topic :: Internet :: File Transfer Protocol (FTP)",
]
dependencies = [
    "pymysql",
]

[project.optional-dependencies]
test = [
    "pytest",
]

[project.scripts]
filedepot-server = "filedepot.server:main"
filedepot = "filedepot.shell:main"

[tool.hatch.build.targets.wheel]
packages = ["filedepot"]

[tool.pytest.ini_options]
testpaths = ["tests"]
addopts = "-ra"
