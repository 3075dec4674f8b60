"""Thread-safe primitives, a thread pool, a task scheduler, parallel quicksort and threading demos."""

__version__ = "0.1.0"
__all__ = ["__version__"]