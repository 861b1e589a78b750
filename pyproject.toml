[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "servicebinding"
version = "0.1.0"
description = "Resource types, validation and status conditions for service bindings, provisioned services and binding projections"
requires-python = ">=3.10"
dependencies = []
keywords = ["service-binding", "kubernetes", "crd", "validation", "conditions"]
classifiers = [
    "Development Status :: 3 - Alpha",
    "Intended Audience :: Developers",
    "Operating System :: OS Independent",
    "Programming Language :: Python :: 3",
    "Programming Language :: Python :: 3 :: Only",
    "Programming Language :: Python :: 3.10",
    "Programming Language :: Python :: 3.11",
    "Programming Language :: Python :: 3.12",
    "Programming Language :: Python :: 3.13",
    "Topic :: Software Development :: Libraries :: Python Modules",
]

[project.optional-dependencies]
test = ["pytest"]

[tool.hatch.build.targets.wheel]
packages = ["servicebinding"]

[tool.pytest.ini_options]
testpaths = ["tests"]
addopts = "-ra"
