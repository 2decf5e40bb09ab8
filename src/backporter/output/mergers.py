"""
Mergers for write requests that target the same file.
"""

import logging
from abc import ABC, abstractmethod
from typing import Any, Dict, List, Sequence

import orjson

from .requests import RequestType, WriteRequest


class RequestMerger(ABC):
    """Combines a group of same-key requests into one."""

    name: str = "merger"

    @abstractmethod
    def can_merge(self, requests: Sequence[WriteRequest]) -> bool:
        pass

    @abstractmethod
    def merge(self, requests: Sequence[WriteRequest]) -> WriteRequest:
        pass


class OverridesMerger(RequestMerger):
    """Merges predicate-override models contributed by several handlers.

    Only requests at the highest priority contribute. Their override lists
    are concatenated in contribution order and deduplicated on the
    (predicate, model) pair. The list is a first-match chain downstream, so
    it is never reordered.
    """

    name = "overrides-merger"

    def __init__(self):
        self.logger = logging.getLogger(f"{__name__}.{self.__class__.__name__}")

    def can_merge(self, requests: Sequence[WriteRequest]) -> bool:
        return (
            len(requests) > 1
            and all(r.type == RequestType.POMMEL_MODEL for r in requests)
            and len({r.path for r in requests}) == 1
        )

    def merge(self, requests: Sequence[WriteRequest]) -> WriteRequest:
        if len(requests) == 1:
            return requests[0]

        # sorted() is stable: equal priorities keep contribution order
        ranked = sorted(requests, key=lambda r: r.priority, reverse=True)
        top = ranked[0].priority
        winners = [r for r in ranked if r.priority == top]

        overrides: List[Any] = []
        for request in winners:
            contributed = request.content.get("overrides")
            if isinstance(contributed, list):
                overrides.extend(contributed)

        unique = deduplicate_overrides(overrides)
        base = winners[0]
        self.logger.info(
            f"Merged {len(requests)} requests for {base.path} "
            f"({len(unique)} overrides, priority {top})"
        )
        return WriteRequest(
            type=base.type,
            path=base.path,
            content={**base.content, "overrides": unique},
            merge=base.merge,
            priority=top,
        )


def deduplicate_overrides(overrides: List[Any]) -> List[Any]:
    """Drop repeated (predicate, model) pairs, keeping the first occurrence."""
    seen: set[bytes] = set()
    unique: List[Any] = []
    for override in overrides:
        if isinstance(override, dict):
            key = orjson.dumps(
                {"predicate": override.get("predicate"), "model": override.get("model")},
                option=orjson.OPT_SORT_KEYS,
            )
        else:
            key = orjson.dumps(override, option=orjson.OPT_SORT_KEYS)
        if key not in seen:
            seen.add(key)
            unique.append(override)
    return unique


class MergerRegistry:
    """Ordered mergers; the first one accepting a group performs the merge."""

    def __init__(self, mergers: Sequence[RequestMerger] | None = None):
        self.logger = logging.getLogger(f"{__name__}.{self.__class__.__name__}")
        self._mergers: List[RequestMerger] = list(mergers) if mergers is not None else []

    @classmethod
    def default(cls) -> "MergerRegistry":
        return cls([OverridesMerger()])

    def register(self, merger: RequestMerger) -> None:
        self._mergers.append(merger)

    @property
    def mergers(self) -> List[RequestMerger]:
        return list(self._mergers)

    def resolve(self, requests: Sequence[WriteRequest]) -> WriteRequest:
        """Reduce a same-key group to the single request that gets written."""
        if len(requests) == 1:
            return requests[0]

        for merger in self._mergers:
            if merger.can_merge(requests):
                self.logger.debug(f"Merging {len(requests)} requests for {requests[0].path} using {merger.name}")
                return merger.merge(requests)

        winner = max(requests, key=lambda r: r.priority)
        if _all_same_content(requests):
            self.logger.debug(f"Identical requests for {winner.path}, keeping one")
        else:
            self.logger.warning(
                f"No merger for {winner.key[0]}:{winner.path}, "
                f"using highest priority request ({winner.priority})"
            )
        return winner


def _all_same_content(requests: Sequence[WriteRequest]) -> bool:
    first: Dict[str, Any] = dict(requests[0].content)
    return all(dict(r.content) == first for r in requests[1:])
