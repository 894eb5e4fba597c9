"""Lazily created, thread-safe single instances and a shared application configuration."""

from __future__ import annotations

import argparse
import sys
import threading
import time
from abc import ABC, abstractmethod
from typing import Any, Callable, ClassVar

_TOKEN = object()


def _check_token(token: object, cls: type) -> None:
    if token is not _TOKEN:
        raise TypeError(f"{cls.__name__} cannot be created directly; use instance()")


def simulate_work(milliseconds: int) -> None:
    """Sleep for ``milliseconds`` to stand in for real work."""
    if milliseconds < 0:
        raise ValueError("duration must not be negative")
    time.sleep(milliseconds / 1000)


def thread_id() -> str:
    """Return the calling thread's identifier as text."""
    return str(threading.get_ident())


def run_in_parallel(func: Callable[[int], Any], num_threads: int) -> list[Any]:
    """Call ``func(i)`` for ``i`` in ``range(num_threads)``, each in its own thread.

    Returns the results in index order. If any call raised, the exception of
    the lowest index is raised again once every thread has finished.
    """
    if num_threads < 0:
        raise ValueError("number of threads must not be negative")
    results: list[Any] = [None] * num_threads
    errors: list[BaseException | None] = [None] * num_threads

    def run(index: int) -> None:
        try:
            results[index] = func(index)
        except BaseException as exc:  # noqa: BLE001
            errors[index] = exc

    threads = [threading.Thread(target=run, args=(i,)) for i in range(num_threads)]
    for thread in threads:
        thread.start()
    for thread in threads:
        thread.join()
    for error in errors:
        if error is not None:
            raise error
    return results


class BaseConfig(ABC):
    """Interface of a named configuration."""

    def __init__(self) -> None:
        print("BaseConfig constructed")

    @abstractmethod
    def name(self) -> str:
        """Return the configuration's name."""


class AppConfig(BaseConfig):
    """Key-value application configuration, safe to use from several threads."""

    def __init__(self) -> None:
        super().__init__()
        self._values: dict[str, str] = {}
        self._lock = threading.Lock()
        print("AppConfig constructed")
        self.load_defaults()

    def name(self) -> str:
        return "AppConfig"

    def set_config_value(self, key: str, value: str) -> None:
        """Store ``value`` under ``key``."""
        print(f"Setting config: {key} = {value}")
        with self._lock:
            self._values[key] = value

    def get_config_value(self, key: str) -> str:
        """Return the value under ``key``, or an empty string if there is none."""
        with self._lock:
            return self._values.get(key, "")

    def load_defaults(self) -> None:
        """Store the default application settings."""
        self.set_config_value("app.name", "Thread-safe singleton demo")
        self.set_config_value("app.version", "1.0.0")
        self.set_config_value("app.maxThreads", "10")


class DCLPSingleton:
    """Single instance created with double-checked locking."""

    _instance: ClassVar[DCLPSingleton | None] = None
    _lock: ClassVar[threading.Lock] = threading.Lock()

    def __init__(self, _token: object = None) -> None:
        _check_token(_token, type(self))
        print("DCLPSingleton constructed (pattern not recommended)")

    @classmethod
    def instance(cls) -> DCLPSingleton:
        """Return the single instance, creating it on first use."""
        if cls._instance is None:
            with cls._lock:
                if cls._instance is None:
                    cls._instance = cls(_TOKEN)
        return cls._instance

    def unsafe(self) -> str:
        """Print and return a warning about this pattern."""
        message = "Warning: this singleton pattern may not be thread-safe on some platforms!"
        print(message)
        return message


class MeyersSingleton:
    """Single instance created on first access under a lock."""

    _instance: ClassVar[MeyersSingleton | None] = None
    _lock: ClassVar[threading.Lock] = threading.Lock()

    def __init__(self, _token: object = None) -> None:
        _check_token(_token, type(self))
        print("MeyersSingleton constructed (recommended pattern)")
        simulate_work(100)

    @classmethod
    def instance(cls) -> MeyersSingleton:
        """Return the single instance, creating it on first use."""
        with cls._lock:
            if cls._instance is None:
                cls._instance = cls(_TOKEN)
            return cls._instance

    def safe_method(self) -> str:
        """Print and return a confirmation message."""
        message = "MeyersSingleton: this method is thread-safe"
        print(message)
        return message


class _Once:
    """Runs a callable exactly once, however many threads ask for it."""

    def __init__(self) -> None:
        self._lock = threading.Lock()
        self._done = False

    def call(self, func: Callable[[], None]) -> None:
        if self._done:
            return
        with self._lock:
            if not self._done:
                func()
                self._done = True


class CallOnceSingleton:
    """Single instance whose initialisation runs exactly once."""

    _instance: ClassVar[CallOnceSingleton | None] = None
    _once: ClassVar[_Once] = _Once()

    def __init__(self, _token: object = None) -> None:
        _check_token(_token, type(self))
        print("CallOnceSingleton constructed")
        simulate_work(100)

    @classmethod
    def _init_singleton(cls) -> None:
        cls._instance = cls(_TOKEN)

    @classmethod
    def instance(cls) -> CallOnceSingleton:
        """Return the single instance, creating it on first use."""
        cls._once.call(cls._init_singleton)
        assert cls._instance is not None
        return cls._instance

    def safe_method(self) -> str:
        """Print and return a confirmation message."""
        message = "CallOnceSingleton: this method is thread-safe"
        print(message)
        return message


class AtomicSingleton:
    """Single instance published only after it is fully constructed."""

    _instance: ClassVar[AtomicSingleton | None] = None
    _lock: ClassVar[threading.Lock] = threading.Lock()

    def __init__(self, _token: object = None) -> None:
        _check_token(_token, type(self))
        print("AtomicSingleton constructed")
        simulate_work(100)

    @classmethod
    def instance(cls) -> AtomicSingleton:
        """Return the single instance, creating it on first use."""
        current = cls._instance
        if current is None:
            with cls._lock:
                current = cls._instance
                if current is None:
                    current = cls(_TOKEN)
                    cls._instance = current
        return current

    def safe_method(self) -> str:
        """Print and return a confirmation message."""
        message = "AtomicSingleton: this method is thread-safe"
        print(message)
        return message


_app_config: AppConfig | None = None
_app_config_lock = threading.Lock()


def app_config() -> AppConfig:
    """Return the process-wide application configuration."""
    global _app_config
    with _app_config_lock:
        if _app_config is None:
            _app_config = AppConfig()
        return _app_config


def base_config() -> BaseConfig:
    """Return the application configuration through its base interface."""
    return app_config()


def cleanup() -> None:
    """Announce cleanup of singleton resources; the instances themselves stay alive."""
    print("SingletonManager: cleaning up singleton resources...")


def demo_all_singletons() -> None:
    """Use every kind of singleton once."""
    print("\n-- All singleton kinds --")
    DCLPSingleton.instance().unsafe()
    MeyersSingleton.instance().safe_method()
    CallOnceSingleton.instance().safe_method()
    AtomicSingleton.instance().safe_method()
    config = app_config()
    print(f"Application name: {config.get_config_value('app.name')}")
    print(f"Application version: {config.get_config_value('app.version')}")


def _access(label: str, get: Callable[[], Any], worker_id: int) -> None:
    print(f"Thread {worker_id} accessing {label} singleton...")
    get().safe_method()
    print(f"Thread {worker_id} accessed {label} singleton")


def _use_app_config(worker_id: int) -> None:
    print(f"Thread {worker_id} accessing AppConfig singleton...")
    config = app_config()
    key = f"thread.{worker_id}"
    if worker_id % 2 == 0:
        print(
            f"Thread {worker_id} read config: app.name = "
            f"{config.get_config_value('app.name')}"
        )
        value = config.get_config_value(key)
        if value:
            print(f"Thread {worker_id} read config: {key} = {value}")
    else:
        config.set_config_value(key, f"Thread {worker_id} was here")
    simulate_work(50)
    print(f"Thread {worker_id} finished with AppConfig singleton")


def _demo_base_interface() -> None:
    print("\n-- BaseConfig interface --")
    config = base_config()
    print(f"Name through the base interface: {config.name()}")
    if isinstance(config, AppConfig):
        print(
            "Recovered AppConfig, app.version = "
            f"{config.get_config_value('app.version')}"
        )
    else:
        print("Conversion failed, not an AppConfig")


def main(argv: list[str] | None = None) -> int:
    """Run the singleton demonstration."""
    argparse.ArgumentParser(description="Thread-safe singleton demonstration").parse_args(argv)
    try:
        print("===== Thread-safe singleton demo =====")
        demo_all_singletons()
        _demo_base_interface()

        for label, get in (
            ("Meyers", MeyersSingleton.instance),
            ("CallOnce", CallOnceSingleton.instance),
            ("Atomic", AtomicSingleton.instance),
        ):
            print(f"\n-- Multi-threaded {label} singleton --")
            run_in_parallel(lambda i, label=label, get=get: _access(label, get, i), 3)

        print("\n-- Multi-threaded application config --")
        run_in_parallel(_use_app_config, 5)

        cleanup()
        print("\n===== End of thread-safe singleton demo =====")
    except Exception as exc:  # noqa: BLE001
        print(f"Error: {exc}", file=sys.stderr)
        return 1
    return 0