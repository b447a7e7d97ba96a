from __future__ import annotations

import copy
import logging
from typing import Callable, Optional, Sequence, Tuple

from sqlalchemy import func
from sqlalchemy.exc import SQLAlchemyError

from ..common.datetime_utils import now_utc
from ..core.exceptions import NotFoundError, PersistenceError
from ..database.models import BlockModel, PageModel
from ..extensions import db
from .model import Block, BlockPatch, NewBlock, Page, PageSummary
from .repository import PageRepository

logger = logging.getLogger(__name__)


def _to_block(row: BlockModel) -> Block:
    return Block(
        block_id=row.id,
        page_id=row.page_id,
        type=row.type,
        content=copy.deepcopy(row.content) if row.content is not None else {},
        order=int(row.order),
        created_at=row.created_at,
        updated_at=row.updated_at,
    )


def _to_page(row: PageModel, blocks: Sequence[BlockModel] = ()) -> Page:
    return Page(
        page_id=row.id,
        owner_id=int(row.owner_id),
        title=row.title,
        icon=row.icon,
        order=int(row.order),
        created_at=row.created_at,
        updated_at=row.updated_at,
        blocks=tuple(_to_block(b) for b in blocks),
    )


class SQLPageRepository(PageRepository):
    def __init__(self, clock: Callable = now_utc):
        self._clock = clock

    def _summary(self, page_id: str) -> PageSummary:
        row, block_count = (
            db.session.query(PageModel, func.count(BlockModel.id))
            .outerjoin(BlockModel, BlockModel.page_id == PageModel.id)
            .filter(PageModel.id == page_id)
            .group_by(PageModel.id)
            .one()
        )
        return PageSummary(
            page_id=row.id,
            title=row.title,
            icon=row.icon,
            updated_at=row.updated_at,
            block_count=int(block_count),
        )

    def _ordered_blocks(self, page_id: str) -> list[BlockModel]:
        return (
            BlockModel.query.filter_by(page_id=page_id)
            .order_by(BlockModel.order.asc(), BlockModel.seq.asc())
            .all()
        )

    def create_page(
        self,
        *,
        owner_id: int,
        title: str,
        icon: str,
        seed_blocks: Sequence[NewBlock],
    ) -> PageSummary:
        now = self._clock()
        page = PageModel(owner_id=int(owner_id), title=title, icon=icon, order=0, created_at=now, updated_at=now)
        for seed in seed_blocks:
            page.blocks.append(
                BlockModel(
                    type=seed.type,
                    content=copy.deepcopy(seed.content),
                    order=int(seed.order),
                    created_at=now,
                    updated_at=now,
                )
            )
        try:
            db.session.add(page)
            db.session.commit()
        except SQLAlchemyError as e:
            db.session.rollback()
            raise PersistenceError("Failed to create page") from e
        return self._summary(page.id)

    def list_summaries(self, owner_id: int) -> Sequence[PageSummary]:
        rows = (
            db.session.query(PageModel, func.count(BlockModel.id))
            .outerjoin(BlockModel, BlockModel.page_id == PageModel.id)
            .filter(PageModel.owner_id == int(owner_id))
            .group_by(PageModel.id)
            .order_by(PageModel.order.asc(), PageModel.updated_at.desc())
            .all()
        )
        return [
            PageSummary(
                page_id=row.id,
                title=row.title,
                icon=row.icon,
                updated_at=row.updated_at,
                block_count=int(block_count),
            )
            for row, block_count in rows
        ]

    def get_for_owner(self, owner_id: int, page_id: str) -> Optional[Page]:
        row = PageModel.query.filter_by(id=page_id, owner_id=int(owner_id)).first()
        if row is None:
            return None
        return _to_page(row, self._ordered_blocks(row.id))

    def update_meta(self, page_id: str, *, title: Optional[str], icon: Optional[str]) -> Page:
        row = db.session.get(PageModel, page_id)
        if row is None:
            raise NotFoundError("Not found")

        changed = False
        if title:
            row.title = title
            changed = True
        if icon:
            row.icon = icon
            changed = True
        if changed:
            row.updated_at = self._clock()

        try:
            db.session.commit()
        except SQLAlchemyError as e:
            db.session.rollback()
            raise PersistenceError("Failed to update page") from e
        return _to_page(row)

    def delete_for_owner(self, owner_id: int, page_id: str) -> int:
        try:
            count = PageModel.query.filter_by(id=page_id, owner_id=int(owner_id)).delete(synchronize_session=False)
            db.session.commit()
        except SQLAlchemyError as e:
            db.session.rollback()
            raise PersistenceError("Failed to delete page") from e
        return int(count)

    def create_block(self, page_id: str, block: NewBlock) -> Block:
        now = self._clock()
        row = BlockModel(
            page_id=page_id,
            type=block.type,
            content=copy.deepcopy(block.content) if block.content is not None else {},
            order=int(block.order),
            created_at=now,
            updated_at=now,
        )
        try:
            db.session.add(row)
            db.session.commit()
        except SQLAlchemyError as e:
            # e.g. the foreign key to a page that no longer exists
            db.session.rollback()
            raise PersistenceError("Failed to create block") from e
        return _to_block(row)

    def bulk_update_blocks(self, patches: Sequence[BlockPatch]) -> None:
        now = self._clock()
        try:
            for patch in patches:
                row = BlockModel.query.filter_by(id=patch.block_id).first()
                if row is None:
                    raise PersistenceError(f"Block {patch.block_id} does not exist")
                if patch.content is not None:
                    row.content = copy.deepcopy(patch.content)
                if patch.order is not None:
                    row.order = int(patch.order)
                if patch.type:
                    row.type = patch.type
                row.updated_at = now
            db.session.commit()
        except SQLAlchemyError as e:
            db.session.rollback()
            raise PersistenceError("Failed to update blocks") from e
        except Exception:
            db.session.rollback()
            raise

    def get_block_with_owner(self, block_id: str) -> Optional[Tuple[Block, int]]:
        found = (
            db.session.query(BlockModel, PageModel.owner_id)
            .join(PageModel, PageModel.id == BlockModel.page_id)
            .filter(BlockModel.id == block_id)
            .first()
        )
        if found is None:
            return None
        row, owner_id = found
        return _to_block(row), int(owner_id)

    def delete_block(self, block_id: str) -> bool:
        try:
            count = BlockModel.query.filter_by(id=block_id).delete(synchronize_session=False)
            db.session.commit()
        except SQLAlchemyError as e:
            db.session.rollback()
            raise PersistenceError("Failed to delete block") from e
        if count:
            logger.debug("deleted block %s", block_id)
        return count > 0
