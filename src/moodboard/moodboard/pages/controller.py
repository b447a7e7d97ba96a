from __future__ import annotations

from flask import Flask, jsonify, request

from ..common.auth import api_login_required, current_identity
from ..common.datetime_utils import to_iso
from ..common.http import domain_error_response, internal_error_response, json_error, request_json
from ..core.exceptions import DomainError, NotFoundError, ValidationError
from ..container import Container
from .model import Block, Page, PageSummary
from .service import parse_block_patch


def summary_json(summary: PageSummary) -> dict:
    return {
        "id": summary.page_id,
        "title": summary.title,
        "icon": summary.icon,
        "updatedAt": to_iso(summary.updated_at),
        "blockCount": summary.block_count,
    }


def block_json(block: Block) -> dict:
    return {
        "id": block.block_id,
        "pageId": block.page_id,
        "type": block.type,
        "content": block.content,
        "order": block.order,
        "createdAt": to_iso(block.created_at),
        "updatedAt": to_iso(block.updated_at),
    }


def page_json(page: Page, *, with_blocks: bool = True) -> dict:
    data = {
        "id": page.page_id,
        "ownerId": page.owner_id,
        "title": page.title,
        "icon": page.icon,
        "order": page.order,
        "createdAt": to_iso(page.created_at),
        "updatedAt": to_iso(page.updated_at),
    }
    if with_blocks:
        data["blocks"] = [block_json(b) for b in page.blocks]
    return data


def register(app: Flask, container: Container) -> None:
    @app.route("/pages", methods=["GET"], endpoint="list_pages")
    @api_login_required
    def list_pages():
        try:
            pages = container.page_service.list_pages(owner_id=current_identity().user_id)
        except Exception:
            return internal_error_response("Failed to fetch pages")
        return jsonify([summary_json(p) for p in pages])

    @app.route("/pages", methods=["POST"], endpoint="create_page")
    @api_login_required
    def create_page():
        body = request_json()
        try:
            summary = container.page_service.create_page(
                owner_id=current_identity().user_id,
                title=body.get("title"),
                icon=body.get("icon"),
                template=body.get("type"),
            )
        except DomainError as e:
            return domain_error_response(e)
        except Exception:
            return internal_error_response("Failed to create page")
        return jsonify(summary_json(summary))

    @app.route("/pages/<page_id>", methods=["GET"], endpoint="get_page")
    @api_login_required
    def get_page(page_id: str):
        try:
            page = container.page_service.get_page(owner_id=current_identity().user_id, page_id=page_id)
        except NotFoundError:
            return json_error("Not found", 404)
        except Exception:
            return internal_error_response("Failed to fetch page")
        return jsonify(page_json(page))

    @app.route("/pages/<page_id>", methods=["PATCH"], endpoint="patch_page")
    @api_login_required
    def patch_page(page_id: str):
        body = request_json()
        try:
            page = container.page_service.patch_page_meta(
                owner_id=current_identity().user_id,
                page_id=page_id,
                title=body.get("title"),
                icon=body.get("icon"),
            )
        except NotFoundError:
            return json_error("Not found", 404)
        except DomainError as e:
            return domain_error_response(e)
        except Exception:
            return internal_error_response("Failed to update page")
        return jsonify(page_json(page, with_blocks=False))

    @app.route("/pages/<page_id>", methods=["DELETE"], endpoint="delete_page")
    @api_login_required
    def delete_page(page_id: str):
        try:
            container.page_service.delete_page(owner_id=current_identity().user_id, page_id=page_id)
        except NotFoundError:
            return json_error("Not found or unauthorized", 404)
        except Exception:
            return internal_error_response("Failed to delete page")
        return jsonify({"success": True})

    @app.route("/pages/<page_id>/blocks", methods=["POST"], endpoint="create_block")
    @api_login_required
    def create_block(page_id: str):
        body = request_json()
        try:
            block = container.page_service.create_block(
                owner_id=current_identity().user_id,
                page_id=page_id,
                block_type=body.get("type"),
                content=body.get("content"),
                order=body.get("order", 0),
            )
        except NotFoundError:
            return json_error("Not found", 404)
        except DomainError as e:
            return domain_error_response(e)
        except Exception:
            return internal_error_response("Failed to create block")
        return jsonify(block_json(block))

    @app.route("/pages/<page_id>/blocks", methods=["PATCH"], endpoint="patch_blocks")
    @api_login_required
    def patch_blocks(page_id: str):
        body = request_json()
        raw_blocks = body.get("blocks")
        if not isinstance(raw_blocks, list):
            return json_error("blocks must be a list", 400)
        try:
            patches = [parse_block_patch(raw) for raw in raw_blocks]
            container.page_service.bulk_patch_blocks(
                owner_id=current_identity().user_id,
                page_id=page_id,
                patches=patches,
            )
        except NotFoundError:
            return json_error("Not found", 404)
        except ValidationError as e:
            return json_error(str(e), 400)
        except Exception:
            return internal_error_response("Failed to update blocks")
        return jsonify({"success": True})

    @app.route("/pages/<page_id>/blocks/reorder", methods=["POST"], endpoint="reorder_blocks")
    @api_login_required
    def reorder_blocks(page_id: str):
        block_ids = request_json().get("blockIds")
        if not isinstance(block_ids, list) or not all(isinstance(b, str) for b in block_ids):
            return json_error("blockIds must be a list of ids", 400)
        try:
            container.page_service.reorder_blocks(
                owner_id=current_identity().user_id,
                page_id=page_id,
                block_ids=block_ids,
            )
        except NotFoundError:
            return json_error("Not found", 404)
        except ValidationError as e:
            return json_error(str(e), 400)
        except Exception:
            return internal_error_response("Failed to reorder blocks")
        return jsonify({"success": True})

    @app.route("/pages/<page_id>/blocks", methods=["DELETE"], endpoint="delete_block")
    @api_login_required
    def delete_block(page_id: str):
        block_id = request.args.get("blockId")
        if not block_id:
            return json_error("Block ID required", 400)
        try:
            container.page_service.delete_block(owner_id=current_identity().user_id, block_id=block_id)
        except DomainError as e:
            return domain_error_response(e)
        except Exception:
            return internal_error_response("Failed to delete block")
        return jsonify({"success": True})

    @app.route("/pages/<page_id>/analyze-title", methods=["POST"], endpoint="analyze_title")
    @api_login_required
    def analyze_title(page_id: str):
        try:
            page = container.page_service.get_page(owner_id=current_identity().user_id, page_id=page_id)
        except NotFoundError:
            return json_error("Not found", 404)
        except Exception:
            return internal_error_response("Failed to analyze title")
        suggestion = container.title_suggester.suggest(page.blocks)
        return jsonify({"title": suggestion.title, "source": suggestion.source.value})
