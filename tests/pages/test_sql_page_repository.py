from __future__ import annotations

from datetime import timedelta

import pytest

from src.moodboard.moodboard.core.exceptions import PersistenceError
from src.moodboard.moodboard.database.models import BlockModel, PageModel
from src.moodboard.moodboard.extensions import db
from src.moodboard.moodboard.pages.model import BlockPatch, NewBlock
from src.moodboard.moodboard.pages.service import initial_blocks
from src.moodboard.moodboard.pages.sql_page_repository import SQLPageRepository


class StepClock:
    def __init__(self, start):
        self.now = start

    def __call__(self):
        self.now += timedelta(seconds=1)
        return self.now


@pytest.fixture
def ctx(app):
    with app.app_context():
        yield


@pytest.fixture
def clock(fixed_now):
    return StepClock(fixed_now)


@pytest.fixture
def repo(clock):
    return SQLPageRepository(clock=clock)


@pytest.fixture
def staff_id(ctx, container):
    return container.users_repo.get_by_username("staff").user_id


@pytest.fixture
def admin_id(ctx, container):
    return container.users_repo.get_by_username("admin").user_id


def test_create_page_seeds_blocks_and_counts_them(repo, staff_id):
    summary = repo.create_page(owner_id=staff_id, title="Ideas", icon="💡", seed_blocks=initial_blocks())

    assert len(summary.page_id) == 32
    assert summary.block_count == 1
    page = repo.get_for_owner(staff_id, summary.page_id)
    assert page.blocks[0].content == {"text": ""}


def test_get_for_owner_hides_other_owners(repo, staff_id, admin_id):
    summary = repo.create_page(owner_id=staff_id, title="Mine", icon="📄", seed_blocks=[])

    assert repo.get_for_owner(admin_id, summary.page_id) is None
    assert repo.delete_for_owner(admin_id, summary.page_id) == 0
    assert repo.get_for_owner(staff_id, summary.page_id) is not None


def test_blocks_are_ordered_by_order_then_creation(repo, staff_id):
    summary = repo.create_page(owner_id=staff_id, title="T", icon="📄", seed_blocks=[])
    first = repo.create_block(summary.page_id, NewBlock(type="text", content={"text": "first"}, order=1))
    second = repo.create_block(summary.page_id, NewBlock(type="text", content={"text": "second"}, order=1))
    top = repo.create_block(summary.page_id, NewBlock(type="text", content={"text": "top"}, order=0))

    page = repo.get_for_owner(staff_id, summary.page_id)

    assert [b.block_id for b in page.blocks] == [top.block_id, first.block_id, second.block_id]


def test_equal_order_keeps_insertion_order_with_same_timestamp(staff_id, fixed_now):
    repo = SQLPageRepository(clock=lambda: fixed_now)

    for _ in range(20):
        summary = repo.create_page(owner_id=staff_id, title="T", icon="📄", seed_blocks=[])
        created = [
            repo.create_block(summary.page_id, NewBlock(type="text", content={"text": str(i)}, order=1)).block_id
            for i in range(4)
        ]

        page = repo.get_for_owner(staff_id, summary.page_id)
        assert [b.block_id for b in page.blocks] == created

        db.session.expire_all()
        assert [b.id for b in db.session.get(PageModel, summary.page_id).blocks] == created


def test_update_meta_touches_updated_at_only_on_change(repo, staff_id):
    summary = repo.create_page(owner_id=staff_id, title="T", icon="📄", seed_blocks=[])

    unchanged = repo.update_meta(summary.page_id, title=None, icon="")
    assert unchanged.updated_at == summary.updated_at

    changed = repo.update_meta(summary.page_id, title="Renamed", icon=None)
    assert changed.title == "Renamed"
    assert changed.updated_at > summary.updated_at


def test_bulk_update_is_all_or_nothing(repo, staff_id):
    summary = repo.create_page(owner_id=staff_id, title="T", icon="📄", seed_blocks=initial_blocks())
    block = repo.get_for_owner(staff_id, summary.page_id).blocks[0]

    with pytest.raises(PersistenceError):
        repo.bulk_update_blocks(
            [
                BlockPatch(block_id=block.block_id, content={"text": "should not stick"}),
                BlockPatch(block_id="does-not-exist", order=3),
            ]
        )

    db.session.expire_all()
    assert repo.get_for_owner(staff_id, summary.page_id).blocks[0].content == {"text": ""}


def test_bulk_update_replaces_content_and_keeps_type_when_empty(repo, staff_id):
    summary = repo.create_page(owner_id=staff_id, title="T", icon="📄", seed_blocks=initial_blocks())
    block = repo.get_for_owner(staff_id, summary.page_id).blocks[0]

    repo.bulk_update_blocks(
        [BlockPatch(block_id=block.block_id, content={"x": 130, "y": 40, "width": 200, "height": "auto"}, type="")]
    )

    saved = repo.get_for_owner(staff_id, summary.page_id).blocks[0]
    assert saved.type == "text"
    assert saved.content == {"x": 130, "y": 40, "width": 200, "height": "auto"}
    assert saved.position.x == 130
    assert saved.position.height == "auto"


def test_deleting_page_cascades_to_blocks(repo, staff_id):
    summary = repo.create_page(owner_id=staff_id, title="T", icon="📄", seed_blocks=initial_blocks())

    assert repo.delete_for_owner(staff_id, summary.page_id) == 1

    assert db.session.get(PageModel, summary.page_id) is None
    assert BlockModel.query.filter_by(page_id=summary.page_id).count() == 0


def test_block_needs_existing_page(repo, staff_id):
    with pytest.raises(PersistenceError):
        repo.create_block("missing-page", NewBlock(type="text", content={}))


def test_get_block_with_owner_joins_parent_page(repo, staff_id):
    summary = repo.create_page(owner_id=staff_id, title="T", icon="📄", seed_blocks=initial_blocks())
    block = repo.get_for_owner(staff_id, summary.page_id).blocks[0]

    found, owner_id = repo.get_block_with_owner(block.block_id)

    assert found.block_id == block.block_id
    assert owner_id == staff_id
    assert repo.get_block_with_owner("nope") is None
    assert repo.delete_block(block.block_id) is True
    assert repo.delete_block(block.block_id) is False


def test_list_summaries_only_for_owner(repo, staff_id, admin_id):
    repo.create_page(owner_id=staff_id, title="A", icon="📄", seed_blocks=initial_blocks())
    repo.create_page(owner_id=staff_id, title="B", icon="📄", seed_blocks=[])
    repo.create_page(owner_id=admin_id, title="C", icon="📄", seed_blocks=[])

    summaries = repo.list_summaries(staff_id)

    # newest first among equal order
    assert [s.title for s in summaries] == ["B", "A"]
    assert [s.block_count for s in summaries] == [0, 1]
