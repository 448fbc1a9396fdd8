[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "anchorgen"
version = "0.4.1"
description = "Generates Rust CPI client source code for Anchor programs from a JSON IDL."
requires-python = ">=3.10"
dependencies = []
keywords = ["solana", "anchor", "idl", "cpi", "code-generation"]
classifiers = [
    "Development Status :: 4 - Beta",
    "Intended Audience :: Developers",
    "Environment :: Console",
    "Operating System :: OS Independent",
    "Programming Language :: Python :: 3",
    "Programming Language :: Python :: 3 :: Only",
    "Programming Language :: Python :: 3.10",
    "Programming Language :: Python :: 3.11",
    "Programming Language :: Python :: 3.12",
    "Programming Language :: Python :: 3.13",
    "Topic :: Software Development :: Code Generators",
]

[project.optional-dependencies]
test = ["pytest"]

[project.scripts]
anchorgen = "anchorgen.cli:main"

[tool.hatch.build.targets.wheel]
packages = ["anchorgen"]

[tool.pytest.ini_options]
addopts = "-ra"
