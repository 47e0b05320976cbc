[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "minikern"
version = "0.1.0"
description = "A small teaching kernel in software: string routines, kernel printf, text console, page map, interrupt gates and boot image builder"
requires-python = ">=3.10"
keywords = ["kernel", "console", "printk", "vsprintf", "idt", "boot-image"]
classifiers = [
    "Development Status :: 3 - Alpha",
    "Intended Audience :: Education",
    "Intended Audience :: Developers",
    "Operating System :: OS Independent",
    "Programming Language :: Python :: 3",
    "Programming Language :: Python :: 3 :: Only",
    "Programming Language :: Python :: 3.10",
    "Programming Language :: Python :: 3.11",
    "Programming Language :: Python :: 3.12",
    "Programming Language :: Python :: 3.13",
    "Topic :: System :: Operating System Kernels :: Linux",
]
dependencies = []

[project.optional-dependencies]
test = ["pytest", "hypothesis"]

[project.scripts]
minikern-build = "minikern.imagebuild:main"

[tool.hatch.build.targets.wheel]
packages = ["minikern"]

[tool.pytest.ini_options]
addopts = "-ra"

[tool.ruff]
line-length = 88
target-version = "py310"

[tool.mypy]
python_version = "3.10"
