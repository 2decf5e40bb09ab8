"""
Catch-all rule guaranteeing every item some output.
"""

from typing import List

from ..compiler.nodes import ModelLeaf
from ..output.requests import MergeStrategy, RequestType, WriteRequest
from ..pack.models import strip_namespace
from .base import ItemHandler, ProcessingContext


class BaseItemHandler(ItemHandler):
    """Passes plain items through and copies textures named after the item."""

    name = "base-item"

    def can_handle(self, context: ProcessingContext) -> bool:
        return True

    def process(self, context: ProcessingContext) -> List[WriteRequest]:
        requests: List[WriteRequest] = []
        namespace = context.structure.namespace

        root = context.root
        if isinstance(root, ModelLeaf):
            own = f"item/{context.item_id}"
            if strip_namespace(root.model) == own:
                self.logger.debug(f"{context.item_id} already uses its own model, keeping it")
            else:
                requests.append(
                    WriteRequest(
                        RequestType.VANILLA_MODEL,
                        f"{own}.json",
                        {
                            "parent": root.model,
                            "textures": {"layer0": f"{namespace}:{own}"},
                        },
                        MergeStrategy.REPLACE,
                        0,
                    )
                )

        textures_root = context.structure.assets_root / "textures"
        for texture in context.structure.find_textures_named(context.item_id):
            requests.append(
                WriteRequest(
                    RequestType.TEXTURE_COPY,
                    f"textures/{texture.relative_to(textures_root).as_posix()}",
                    {"sourcePath": str(texture), "itemId": context.item_id},
                    MergeStrategy.REPLACE,
                    0,
                )
            )
        return requests
