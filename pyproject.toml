[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "aura"
version = "0.2.10"
description = "Intermediate representation, constant-folding optimizer and runtime intrinsics for the Aura programming language"
requires-python = ">=3.10"
dependencies = []
keywords = ["compiler", "ir", "ssa", "optimizer", "constant-folding", "intrinsics", "aura"]
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
    "Topic :: Software Development :: Compilers",
]

[project.optional-dependencies]
test = ["pytest"]

[tool.hatch.build.targets.wheel]
packages = ["aura"]

[tool.pytest.ini_options]
addopts = "-ra"
