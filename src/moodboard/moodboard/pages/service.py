from __future__ import annotations

import logging
from typing import Any, Iterable, Optional, Sequence

from ..common.validators import optional_int, optional_str, require_non_empty
from ..core.constants import DEFAULT_PAGE_ICON, DEFAULT_PAGE_TEMPLATE, DEFAULT_PAGE_TITLE
from ..core.exceptions import NotFoundError, ValidationError
from .guard import ResourceGuard
from .model import Block, BlockPatch, NewBlock, Page, PageSummary
from .repository import PageRepository

logger = logging.getLogger(__name__)


def initial_blocks(template: str = DEFAULT_PAGE_TEMPLATE) -> list[NewBlock]:
    """Seed blocks for a new page.

    Every template currently starts as an empty mood board with one text block.
    """
    return [NewBlock(type="text", content={"text": ""}, order=0)]


def parse_block_patch(raw: Any) -> BlockPatch:
    if not isinstance(raw, dict):
        raise ValidationError("Each block patch must be an object")
    block_id = raw.get("id")
    if not block_id or not isinstance(block_id, str):
        raise ValidationError("Each block patch needs an id")
    block_type = raw.get("type")
    if block_type is not None and not isinstance(block_type, str):
        raise ValidationError("Block type must be a string")
    return BlockPatch(
        block_id=block_id,
        content=raw.get("content"),
        order=optional_int(raw.get("order"), "order"),
        type=block_type or None,
    )


class PageService:
    """Use cases of the page aggregate.

    Ownership is verified through ``ResourceGuard`` before every mutation:
    page operations by the (id, owner) lookup, ``delete_block`` through the
    block's parent page. ``bulk_patch_blocks`` checks the page once and then
    updates the listed block ids without re-checking that each of them
    belongs to that page.
    """

    def __init__(self, pages: PageRepository, guard: ResourceGuard):
        self._pages = pages
        self._guard = guard

    def create_page(
        self,
        *,
        owner_id: int,
        title: Optional[str] = None,
        icon: Optional[str] = None,
        template: Optional[str] = None,
    ) -> PageSummary:
        title = optional_str(title, "title")
        icon = optional_str(icon, "icon")
        template = optional_str(template, "type")
        summary = self._pages.create_page(
            owner_id=int(owner_id),
            title=title or DEFAULT_PAGE_TITLE,
            icon=icon or DEFAULT_PAGE_ICON,
            seed_blocks=initial_blocks(template or DEFAULT_PAGE_TEMPLATE),
        )
        logger.info("page %s created by user %s", summary.page_id, owner_id)
        return summary

    def list_pages(self, *, owner_id: int) -> Sequence[PageSummary]:
        return self._pages.list_summaries(int(owner_id))

    def get_page(self, *, owner_id: int, page_id: str) -> Page:
        return self._guard.require_page(owner_id, page_id)

    def patch_page_meta(
        self,
        *,
        owner_id: int,
        page_id: str,
        title: Optional[str] = None,
        icon: Optional[str] = None,
    ) -> Page:
        title = optional_str(title, "title")
        icon = optional_str(icon, "icon")
        self._guard.require_page(owner_id, page_id)
        return self._pages.update_meta(page_id, title=title, icon=icon)

    def delete_page(self, *, owner_id: int, page_id: str) -> None:
        self._guard.require_page(owner_id, page_id)
        # Still deleted by the (id, owner) pair: a concurrent delete leaves zero rows.
        if self._pages.delete_for_owner(int(owner_id), page_id) == 0:
            raise NotFoundError("Not found or unauthorized")
        logger.info("page %s deleted by user %s", page_id, owner_id)

    def create_block(
        self,
        *,
        owner_id: int,
        page_id: str,
        block_type: str,
        content: Any = None,
        order: Any = 0,
    ) -> Block:
        self._guard.require_page(owner_id, page_id)
        block_type = require_non_empty(block_type if isinstance(block_type, str) else "", "Block type")
        return self._pages.create_block(
            page_id,
            NewBlock(type=block_type, content=content if content is not None else {}, order=optional_int(order, "order") or 0),
        )

    def bulk_patch_blocks(self, *, owner_id: int, page_id: str, patches: Sequence[BlockPatch]) -> None:
        self._guard.require_page(owner_id, page_id)
        if not patches:
            return
        self._pages.bulk_update_blocks(list(patches))

    def reorder_blocks(self, *, owner_id: int, page_id: str, block_ids: Iterable[str]) -> None:
        ids = list(block_ids)
        if len(set(ids)) != len(ids):
            raise ValidationError("Block ids must be unique")
        patches = [BlockPatch(block_id=block_id, order=index) for index, block_id in enumerate(ids)]
        self.bulk_patch_blocks(owner_id=owner_id, page_id=page_id, patches=patches)

    def delete_block(self, *, owner_id: int, block_id: str) -> None:
        self._guard.require_block(owner_id, block_id)
        if not self._pages.delete_block(block_id):
            raise NotFoundError("Block not found")
