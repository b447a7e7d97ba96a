from __future__ import annotations

from ..core.exceptions import AuthorizationError, NotFoundError
from .model import Block, Page
from .repository import PageRepository


class ResourceGuard:
    """Single place where page/block ownership is verified before storage is touched.

    Pages are looked up by the (id, owner) pair, so a page owned by someone
    else is reported exactly like a missing one. Blocks are checked through
    their parent page, and an owner mismatch is reported as unauthorized.
    """

    def __init__(self, pages: PageRepository):
        self._pages = pages

    def require_page(self, owner_id: int, page_id: str) -> Page:
        page = self._pages.get_for_owner(int(owner_id), page_id)
        if page is None:
            raise NotFoundError("Not found")
        return page

    def require_block(self, owner_id: int, block_id: str) -> Block:
        found = self._pages.get_block_with_owner(block_id)
        if found is None:
            raise NotFoundError("Block not found")
        block, page_owner_id = found
        if page_owner_id != int(owner_id):
            raise AuthorizationError("Unauthorized")
        return block
