"""Resources owned exclusively or shared by a handler that releases them when closed."""

from __future__ import annotations

import argparse
import sys
from abc import ABC, abstractmethod


class Resource(ABC):
    """A named resource identified by an integer id."""

    def __init__(self, resource_id: int, name: str) -> None:
        self._id = resource_id
        self._name = name
        self._released = False
        print(f"Resource created: ID={resource_id}, name={name}")

    @property
    def id(self) -> int:
        """The resource's identifier."""
        return self._id

    @property
    def name(self) -> str:
        """The resource's name."""
        return self._name

    @property
    def released(self) -> bool:
        """Whether the resource has been released."""
        return self._released

    @abstractmethod
    def use(self) -> str:
        """Use the resource and return a description of what was done."""

    def _release(self) -> None:
        if self._released:
            return
        self._released = True
        print(f"Resource destroyed: ID={self._id}, name={self._name}")

    def __repr__(self) -> str:
        return f"{type(self).__name__}(id={self._id!r}, name={self._name!r})"


class MemoryResource(Resource):
    """A resource backed by an in-memory buffer."""

    def __init__(self, resource_id: int, name: str, size: int) -> None:
        if size < 0:
            raise ValueError("buffer size must not be negative")
        super().__init__(resource_id, name)
        self.size = size
        self.buffer = bytearray(size)
        print(f"Memory resource initialised: size={size} bytes")

    def use(self) -> str:
        message = (
            f"Using memory resource: ID={self.id}, name={self.name}, "
            f"size={self.size} bytes"
        )
        print(message)
        return message

    def _release(self) -> None:
        if self.released:
            return
        print(f"Memory resource released: size={self.size} bytes")
        self.buffer = bytearray()
        super()._release()


class FileResource(Resource):
    """A resource referring to a file path."""

    def __init__(self, resource_id: int, name: str, path: str) -> None:
        super().__init__(resource_id, name)
        self.path = path
        print(f"File resource initialised: path={path}")

    def use(self) -> str:
        message = (
            f"Using file resource: ID={self.id}, name={self.name}, path={self.path}"
        )
        print(message)
        return message

    def _release(self) -> None:
        if self.released:
            return
        print(f"File resource released: path={self.path}")
        super()._release()


class ResourceHandler:
    """Keeps exclusive and shared resources; releases exclusive ones on close."""

    def __init__(self) -> None:
        self._exclusive: list[Resource] = []
        self._shared: list[Resource] = []
        self._tracked: int | None = 0
        self._closed = False
        print("Resource handler initialised")

    @property
    def closed(self) -> bool:
        """Whether the handler has released its resources."""
        return self._closed

    def add_exclusive_resource(self, resource: Resource | None) -> None:
        """Take ownership of ``resource``; ``None`` is ignored."""
        if resource is None:
            return
        print(f"Added exclusive resource: ID={resource.id}")
        self._exclusive.append(resource)

    def add_shared_resource(self, resource: Resource | None) -> None:
        """Keep a shared reference to ``resource``; ``None`` is ignored."""
        if resource is None:
            return
        print(f"Added shared resource: ID={resource.id}")
        self._shared.append(resource)

    def get_exclusive_resource(self, resource_id: int) -> Resource | None:
        """Return the first exclusive resource with ``resource_id``, if any."""
        return next((r for r in self._exclusive if r.id == resource_id), None)

    def get_shared_resource(self, resource_id: int) -> Resource | None:
        """Return the first shared resource with ``resource_id``, if any."""
        return next((r for r in self._shared if r.id == resource_id), None)

    def use_resource(self, resource_id: int) -> str | None:
        """Use the resource with ``resource_id``, exclusive ones first.

        Returns the resource's description, or ``None`` if there is none.
        """
        resource = self.get_exclusive_resource(resource_id)
        if resource is None:
            resource = self.get_shared_resource(resource_id)
        if resource is None:
            print(f"No resource with ID {resource_id}")
            return None
        return resource.use()

    def describe_resources(self) -> str:
        """Return a listing of all held resources."""
        lines = ["====== Resources ======", "Exclusive resources:"]
        lines.extend(f"  ID={r.id}, name={r.name}" for r in self._exclusive)
        lines.append("Shared resources:")
        lines.extend(f"  ID={r.id}, name={r.name}" for r in self._shared)
        lines.append("=======================")
        return "\n".join(lines) + "\n"

    def close(self) -> None:
        """Release exclusive resources and drop shared references."""
        if self._closed:
            return
        self._closed = True
        print("Resource handler closing, releasing all managed resources")
        if self._tracked is not None:
            print(f"Releasing tracked resource, value: {self._tracked}")
            self._tracked = None
        self._shared.clear()
        for resource in self._exclusive:
            resource._release()
        self._exclusive.clear()

    def __enter__(self) -> ResourceHandler:
        return self

    def __exit__(self, exc_type, exc, tb) -> None:
        self.close()


def main(argv: list[str] | None = None) -> int:
    """Run the resource ownership demonstration."""
    argparse.ArgumentParser(description="Resource ownership demonstration").parse_args(argv)
    try:
        print("===== Resource ownership demo =====")
        with ResourceHandler() as handler:
            handler.add_exclusive_resource(MemoryResource(1, "Memory cache", 1024))
            handler.add_exclusive_resource(
                FileResource(2, "Config file", "/etc/config.json")
            )

            log_file = FileResource(3, "Log file", "/var/log/app.log")
            handler.add_shared_resource(log_file)

            shared = handler.get_shared_resource(log_file.id)
            print(
                "Backup handler also uses the same log file: "
                f"{log_file.path}, shared with handler: {shared is log_file}"
            )

            print()
            print(handler.describe_resources())

            for resource_id in (1, 2, 3, 99):
                handler.use_resource(resource_id)

            print("\n===== End of resource ownership demo =====")
    except Exception as exc:  # noqa: BLE001
        print(f"Error: {exc}", file=sys.stderr)
        return 1
    return 0