from __future__ import annotations

from typing import Optional, Protocol, Sequence, Tuple

from .model import Block, BlockPatch, NewBlock, Page, PageSummary


class PageRepository(Protocol):
    """Repository interface for the page aggregate (pages + their blocks).

    Note: block operations trust the caller to have checked page ownership
    already; only ``get_block_with_owner`` exposes the owner for a later check.
    """

    def create_page(
        self,
        *,
        owner_id: int,
        title: str,
        icon: str,
        seed_blocks: Sequence[NewBlock],
    ) -> PageSummary:
        raise NotImplementedError

    def list_summaries(self, owner_id: int) -> Sequence[PageSummary]:
        """Ordered by ``order`` ascending, then ``updated_at`` descending."""

        raise NotImplementedError

    def get_for_owner(self, owner_id: int, page_id: str) -> Optional[Page]:
        """Page with blocks ordered by ``order``; None when missing or not owned."""

        raise NotImplementedError

    def update_meta(self, page_id: str, *, title: Optional[str], icon: Optional[str]) -> Page:
        raise NotImplementedError

    def delete_for_owner(self, owner_id: int, page_id: str) -> int:
        """Delete by (id, owner) pair; returns the number of pages removed."""

        raise NotImplementedError

    def create_block(self, page_id: str, block: NewBlock) -> Block:
        raise NotImplementedError

    def bulk_update_blocks(self, patches: Sequence[BlockPatch]) -> None:
        """Apply all patches in one transaction, or none of them."""

        raise NotImplementedError

    def get_block_with_owner(self, block_id: str) -> Optional[Tuple[Block, int]]:
        raise NotImplementedError

    def delete_block(self, block_id: str) -> bool:
        raise NotImplementedError
