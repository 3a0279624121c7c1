[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "matchkit"
version = "0.1.0"
description = "Composable assertion matchers with descriptive failure messages"
requires-python = ">=3.10"
keywords = ["testing", "matchers", "assertions", "json", "yaml", "xml", "http"]
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
    "Topic :: Software Development :: Testing",
]
dependencies = [
    "pyyaml",
]

[project.optional-dependencies]
test = [
    "pytest",
]

[tool.hatch.build.targets.wheel]
packages = ["matchkit"]

[tool.pytest.ini_options]
testpaths = ["tests"]
addopts = "-ra"
