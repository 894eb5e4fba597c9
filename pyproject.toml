[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "idiomkit"
version = "0.1.0"
description = "Small, self-contained demonstrations of classic object design idioms: lazy vector expressions, copyable widgets, tracked allocation, policy-based logging, scoped file handling, owned and shared resources, container traits and thread-safe singletons."
requires-python = ">=3.10"
dependencies = []
keywords = [
    "idioms",
    "design-patterns",
    "lazy-evaluation",
    "singleton",
    "policy-based-design",
    "resource-management",
    "memory-pool",
    "logging",
]
classifiers = [
    "Development Status :: 4 - Beta",
    "Intended Audience :: Developers",
    "Intended Audience :: Education",
    "Operating System :: OS Independent",
    "Programming Language :: Python :: 3",
    "Programming Language :: Python :: 3 :: Only",
    "Programming Language :: Python :: 3.10",
    "Programming Language :: Python :: 3.11",
    "Programming Language :: Python :: 3.12",
    "Programming Language :: Python :: 3.13",
    "Topic :: Software Development :: Libraries",
]

[project.optional-dependencies]
test = ["pytest"]

[project.scripts]
idiomkit-expressions = "idiomkit.expressions:main"
idiomkit-widget = "idiomkit.widget:main"
idiomkit-memory = "idiomkit.memory:main"
idiomkit-logger = "idiomkit.logger:main"
idiomkit-files = "idiomkit.files:main"
idiomkit-resources = "idiomkit.resources:main"
idiomkit-traits = "idiomkit.traits:main"
idiomkit-singletons = "idiomkit.singletons:main"

[tool.hatch.build.targets.wheel]
packages = ["idiomkit"]

[tool.hatch.build.targets.sdist]
include = ["idiomkit", "tests", "README.md", "pyproject.toml"]

[tool.pytest.ini_options]
addopts = "-ra"

[tool.ruff]
line-length = 100
target-version = "py310"

[tool.ruff.lint]
select = ["E", "F", "W", "I", "B", "UP"]

[tool.mypy]
python_version = "3.10"
warn_unused_ignores = true
warn_redundant_casts = true
