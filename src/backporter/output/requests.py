"""
Write requests: the intermediate artifact every handler contributes.
"""

from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Mapping, Tuple


class RequestType(str, Enum):
    POMMEL_MODEL = "pommel-model"
    CIT_PROPERTIES = "cit-properties"
    VANILLA_MODEL = "vanilla-model"
    TEXTURE_COPY = "texture-copy"


class MergeStrategy(str, Enum):
    REPLACE = "replace"
    MERGE_OVERRIDES = "merge-overrides"


RequestKey = Tuple[str, str]


@dataclass(frozen=True)
class WriteRequest:
    """One artifact to be written, relative to its writer's output root.

    `type` is normally a `RequestType`; plain strings are accepted so that an
    unknown type reaches the writer registry and is reported there.
    """
    type: RequestType | str
    path: str
    content: Mapping[str, Any] = field(default_factory=dict)
    merge: MergeStrategy | None = None
    priority: int = 0

    @property
    def key(self) -> RequestKey:
        """Conflict key: requests sharing it end up as one file."""
        return (_type_name(self.type), self.path)


def _type_name(request_type: RequestType | str) -> str:
    return request_type.value if isinstance(request_type, RequestType) else str(request_type)
