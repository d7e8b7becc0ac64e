[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "firestore_kit"
version = "0.1.0"
description = "Typed models, value serialization and query building for Firestore documents"
requires-python = ">=3.10"
dependencies = []
keywords = ["firestore", "database", "serialization", "query", "document"]
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
    "Typing :: Typed",
    "Topic :: Database :: Front-Ends",
]

[project.optional-dependencies]
test = ["pytest"]

[tool.hatch.build.targets.wheel]
packages = ["firestore_kit"]

[tool.pytest.ini_options]
testpaths = ["tests"]
addopts = "-ra"
