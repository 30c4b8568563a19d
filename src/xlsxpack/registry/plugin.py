"""Explicit plugin registry.

Plugins are registered with ``register(descriptor, factory)``; nothing is
discovered by introspection. Per queue and per unique id exactly one
registration wins:

- the highest ``priority`` wins (default 0);
- on equal priority the earliest registration is kept.

The resolved list of a queue follows the order in which each id was first
registered.
"""

import re
from collections.abc import Iterable
from dataclasses import dataclass
from typing import Self

from loguru import logger

from ..spec.plugin import (
    EnumPluginQueue,
    Plugin,
    PluginFactory,
    SpecPluginDescriptor,
    SpecPluginEntry,
)

_RE_REGISTRY_TOKEN = re.compile(r"^[0-9A-Za-z][0-9A-Za-z._-]*$")


def _validate_registry_token(token: str, *, kind: str) -> None:
    if not token:
        raise ValueError(f"{kind} must be non-empty")
    if not _RE_REGISTRY_TOKEN.fullmatch(token):
        raise ValueError(
            f"Invalid {kind}: {token!r}. Allowed pattern: {_RE_REGISTRY_TOKEN.pattern}"
        )


@dataclass(slots=True)
class PluginRegistry:
    """
    In-memory registry of plugin factories keyed by ``(queue, id)``.

    Attributes:
        _entries (dict[tuple[EnumPluginQueue, str], list[SpecPluginEntry]]):
            Every registration per key, in registration order. Dict order is
            the order each key was first registered.
        _resolved (dict[EnumPluginQueue, list[SpecPluginEntry]]): Resolution
            cache, dropped on every ``register``.
        _n_seq (int): Registration counter.
    """

    _entries: dict[tuple[EnumPluginQueue, str], list[SpecPluginEntry]]
    _resolved: dict[EnumPluginQueue, list[SpecPluginEntry]]
    _n_seq: int = 0

    @classmethod
    def new(cls) -> "PluginRegistry":
        return cls(_entries={}, _resolved={})

    def register(self, descriptor: SpecPluginDescriptor, factory: PluginFactory) -> Self:
        """
        Register a plugin factory.

        Registering is allowed any number of times; a registration sharing
        ``(queue, id)`` with an earlier one competes with it at resolution.

        Args:
            descriptor (SpecPluginDescriptor): Unique id, queue, priority and,
                for package plugins, the contributed part.
            factory (PluginFactory): Zero-argument callable returning a fresh
                plugin instance.

        Raises:
            ValueError: If ``descriptor.id`` is not a valid registry token.
            TypeError: If ``factory`` is not callable.

        Returns:
            Self: The registry (for chaining).

        Examples:
            >>> registry = PluginRegistry.new()
            >>> registry.register(
            ...     SpecPluginDescriptor(id="audit", queue=EnumPluginQueue.WRITER_APPEND),
            ...     AuditPlugin,
            ... )  # doctest: +SKIP
        """
        _validate_registry_token(descriptor.id, kind="plugin id")
        if not callable(factory):
            raise TypeError(f"Arg `factory` must be callable, got {type(factory)!r}.")

        entry = SpecPluginEntry(descriptor=descriptor, factory=factory, n_seq=self._n_seq)
        self._n_seq += 1
        self._entries.setdefault((descriptor.queue, descriptor.id), []).append(entry)
        self._resolved.clear()
        logger.debug(
            f"Plugin registered: {descriptor.queue.value}/{descriptor.id} "
            f"(priority={descriptor.priority})"
        )
        return self

    def register_many(
        self, items: Iterable[tuple[SpecPluginDescriptor, PluginFactory]]
    ) -> Self:
        for _descriptor, _factory in items:
            self.register(_descriptor, _factory)
        return self

    @staticmethod
    def _select_winner(l_candidates: list[SpecPluginEntry]) -> SpecPluginEntry:
        # Strictly greater priority replaces; equal priority keeps the earlier one.
        winner = l_candidates[0]
        for _entry in l_candidates[1:]:
            if _entry.descriptor.priority > winner.descriptor.priority:
                winner = _entry
        return winner

    def resolve(self, queue: EnumPluginQueue) -> list[SpecPluginEntry]:
        """
        Resolve one winning registration per unique id of ``queue``.

        Returns:
            list[SpecPluginEntry]: Winners in first-registration order of
            their ids.
        """
        l_cached = self._resolved.get(queue)
        if l_cached is not None:
            return list(l_cached)

        l_winners: list[SpecPluginEntry] = []
        for (_queue, _id), _candidates in self._entries.items():
            if _queue is not queue:
                continue
            winner = self._select_winner(_candidates)
            if len(_candidates) > 1:
                logger.debug(
                    f"Plugin conflict on {queue.value}/{_id}: {len(_candidates)} "
                    f"registrations, winner priority={winner.descriptor.priority} "
                    f"seq={winner.n_seq}"
                )
            l_winners.append(winner)
        self._resolved[queue] = l_winners
        return list(l_winners)

    def get(self, queue: EnumPluginQueue, plugin_id: str) -> SpecPluginEntry:
        """
        Retrieve the winning registration of ``plugin_id`` on ``queue``.

        Raises:
            ValueError: If nothing is registered under that id.
        """
        l_candidates = self._entries.get((queue, plugin_id))
        if not l_candidates:
            raise ValueError(
                f"Unknown id: {plugin_id!r} on queue {queue.value!r}. "
                f"Available ids: {self.list_ids(queue)}."
            )
        return self._select_winner(l_candidates)

    def create(self, queue: EnumPluginQueue, plugin_id: str) -> Plugin:
        return self.get(queue, plugin_id).create()

    def contains(self, queue: EnumPluginQueue, plugin_id: str) -> bool:
        return (queue, plugin_id) in self._entries

    def list_ids(self, queue: EnumPluginQueue) -> list[str]:
        return sorted(_id for (_queue, _id) in self._entries if _queue is queue)

    def copy(self) -> "PluginRegistry":
        """Independent registry with the same registrations."""
        return PluginRegistry(
            _entries={k: list(v) for k, v in self._entries.items()},
            _resolved={},
            _n_seq=self._n_seq,
        )
