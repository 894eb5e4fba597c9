# idiomkit

A collection of small, working modules. Each one shows a well-known object
design idiom and comes with a demonstration command:

| Module                 | What it shows                                                   |
|------------------------|-----------------------------------------------------------------|
| `idiomkit.expressions` | Lazily evaluated vector expressions (`+`, `-`, `*`, `sqrt`, `square`, `absolute`) |
| `idiomkit.widget`      | A named widget with features, independent copies and `swap`     |
| `idiomkit.memory`      | An allocation tracker, a fixed-block memory pool, leak reports  |
| `idiomkit.logger`      | A logger built from formatter, output, locking and level parts  |
| `idiomkit.files`       | Scoped file handles, whole-file and line-by-line reading        |
| `idiomkit.resources`   | Exclusive and shared resources owned by a handler               |
| `idiomkit.traits`      | Container traits, factorial and Fibonacci, capability checks    |
| `idiomkit.singletons`  | Several thread-safe singleton strategies and a shared config    |

The package has no runtime dependencies and needs Python 3.10 or later.

## Installation

```
pip install .
```

Install the test extra to run the test suite:

```
pip install ".[test]"
pytest
```

## Using the library

Vector expressions are built lazily and computed only when evaluated:

```python
from idiomkit.expressions import Vector, sqrt, square

a = Vector([1.0, 1.5, 1.0])
b = Vector.filled(3, 2.0)

expr = sqrt(square(a) + square(b))   # nothing computed yet
result = expr.evaluate()              # a Vector
print(list(result))
```

Adding or subtracting expressions of different lengths raises `ValueError`.

A widget's copies are independent of the original:

```python
from idiomkit.widget import Widget, swap

phone = Widget("phone")
phone.add_feature("touch screen")
tablet = phone.copy()
tablet.add_feature("large screen")
print(phone.feature_count, tablet.feature_count)  # 1 2
swap(phone, tablet)
print(phone.describe())
```

Tracked objects and a memory pool:

```python
from idiomkit.memory import MemoryPool, MemoryTracker, Widget

tracker = MemoryTracker()
w = Widget.create(tracker=tracker)
print(tracker.total_allocated)      # 16
w.release()
print(tracker.leak_report())

pool = MemoryPool(block_size=16, pool_size=64)
pooled = Widget.create_in_pool(pool, tracker=tracker)
print(pool.free_count)              # 3
pooled.release()
```

A logger that keeps its messages in memory:

```python
from idiomkit.logger import LevelFilter, LogLevel, Logger, BufferedOutput

logger = Logger(output=BufferedOutput(), level_filter=LevelFilter(LogLevel.WARNING))
logger.info("dropped")
logger.error("kept")
print(logger.output.buffer)         # ('[ERROR] kept',)
```

Files are closed when their handler leaves its `with` block:

```python
from idiomkit.files import FileHandler, FileMode, LineIterator

with FileHandler("notes.txt", FileMode.WRITE) as writer:
    writer.write_line("first")
    writer.write_line("second")

with FileHandler("notes.txt", FileMode.READ) as reader:
    for line in LineIterator(reader):
        print(line)
```

Opening a missing file for reading raises `FileException`.

Helpers from the traits module:

```python
from idiomkit.traits import factorial, fibonacci, has_size_method, container_traits

factorial(5)                         # 120
fibonacci(10)                        # 55
has_size_method([1, 2, 3])           # True
container_traits({}).is_associative  # True
```

The configuration singleton is shared by every caller:

```python
from idiomkit.singletons import app_config

config = app_config()
config.get_config_value("app.version")   # "1.0.0"
config.set_config_value("feature.flag", "on")
assert app_config() is config
```

## Demonstration commands

Each module has a command that walks through its idiom and prints what
happens:

```
idiomkit-expressions
idiomkit-widget
idiomkit-memory
idiomkit-logger
idiomkit-files
idiomkit-resources
idiomkit-traits
idiomkit-singletons
```

`idiomkit-logger` writes `example.log` and `buffer_dump.log`, and
`idiomkit-files` writes `test.txt`, into the current directory, so run them
from a scratch directory.

## What the package does not do

`idiomkit.memory` does not allocate or free real memory. Its tracker and
pool work with simulated integer addresses and byte counts, so they show how
allocations are recorded, pooled and reported as leaks, but they say nothing
about the memory the Python process actually uses.