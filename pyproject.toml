[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "judgerun"
version = "0.1.0"
description = "Sandboxed code runner for judging submissions under time and memory limits"
requires-python = ">=3.10"
dependencies = []
keywords = ["judge", "sandbox", "nsjail", "code-runner", "competitive-programming"]
classifiers = [
    "Development Status :: 3 - Alpha",
    "Intended Audience :: Developers",
    "Operating System :: POSIX :: Linux",
    "Programming Language :: Python :: 3",
    "Programming Language :: Python :: 3 :: Only",
    "Programming Language :: Python :: 3.10",
    "Programming Language :: Python :: 3.11",
    "Programming Language :: Python :: 3.12",
    "Programming Language :: Python :: 3.13",
    "Topic :: Software Development :: Testing",
]

[project.optional-dependencies]
test = ["pytest"]

[project.scripts]
judgerun-server = "judgerun.server:main"
judgerun-dockerfile = "judgerun.dockerfile:main"

[tool.hatch.build.targets.wheel]
packages = ["judgerun"]

[tool.pytest.ini_options]
testpaths = ["tests"]
addopts = "-ra"
