from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Mapping

from .blocks.factory import BlockKindFactory
from .common.kv_store import KeyValueStore, build_kv_store
from .core.constants import TYPING_TTL_SECONDS
from .messages.typing_service import TypingService
from .pages.guard import ResourceGuard
from .pages.service import PageService
from .pages.sql_page_repository import SQLPageRepository
from .pages.title_suggester import TitleSuggester
from .users.service import AuthService, UserService
from .users.sql_user_repository import SQLUserRepository


@dataclass(frozen=True)
class Container:
    users_repo: SQLUserRepository
    pages_repo: SQLPageRepository
    kv_store: KeyValueStore
    block_kinds: BlockKindFactory

    guard: ResourceGuard
    auth_service: AuthService
    user_service: UserService
    page_service: PageService
    title_suggester: TitleSuggester
    typing_service: TypingService


def build_container(config: Mapping[str, Any]) -> Container:
    users_repo = SQLUserRepository()
    pages_repo = SQLPageRepository()
    kv_store = build_kv_store(
        str(config.get("TYPING_STORE", "memory")),
        redis_url=config.get("REDIS_URL"),
    )
    block_kinds = BlockKindFactory()

    guard = ResourceGuard(pages_repo)
    auth_service = AuthService(users_repo)
    user_service = UserService(users_repo)
    page_service = PageService(pages_repo, guard)
    title_suggester = TitleSuggester(
        api_key=config.get("PERPLEXITY_API_KEY") or None,
        timeout=float(config.get("TITLE_AI_TIMEOUT", 10.0)),
        kinds=block_kinds,
    )
    typing_service = TypingService(
        kv_store,
        ttl_seconds=float(config.get("TYPING_TTL_SECONDS", TYPING_TTL_SECONDS)),
    )

    return Container(
        users_repo=users_repo,
        pages_repo=pages_repo,
        kv_store=kv_store,
        block_kinds=block_kinds,
        guard=guard,
        auth_service=auth_service,
        user_service=user_service,
        page_service=page_service,
        title_suggester=title_suggester,
        typing_service=typing_service,
    )
