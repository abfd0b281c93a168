[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "bkutil"
version = "0.1.0"
description = "Small building blocks for services: cache keys, a retrieving in-memory cache, conversions, AES-GCM, wrapped errors, sets and named loggers."
requires-python = ">=3.10"
keywords = ["cache", "ttl", "aes-gcm", "errors", "logging", "conversion", "utilities"]
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
    "Topic :: Software Development :: Libraries :: Python Modules",
    "Typing :: Typed",
]
dependencies = [
    "cryptography",
]

[project.optional-dependencies]
test = [
    "pytest",
]

[tool.hatch.build.targets.wheel]
packages = ["bkutil"]

[tool.pytest.ini_options]
testpaths = ["tests"]
addopts = "-ra"
