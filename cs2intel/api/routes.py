"""Routes for the api blueprint."""

from __future__ import annotations

from typing import Any

from flask import current_app, jsonify, request

from cs2intel.cache import CacheCategory
from cs2intel.errors import ValidationError
from cs2intel.extensions import cache

from . import bp


@bp.route("/refresh", methods=["GET"])
def cache_stats() -> Any:
    """Report how many entries and bytes each cache category holds."""
    return jsonify({"success": True, "stats": cache.stats()})


@bp.route("/refresh", methods=["POST"])
def clear_cache() -> Any:
    """Clear one cache category (``{"category": ...}``) or everything."""
    body = request.get_json(silent=True)
    if not isinstance(body, dict):
        body = {}
    category = body.get("category")

    if category:
        if category not in CacheCategory.values():
            raise ValidationError(f"Invalid category: {category}")
        cache.clear_category(category)
        current_app.logger.info(f"Cache cleared for category: {category}")
        return jsonify(
            {"success": True, "message": f"Cache cleared for category: {category}"}
        )

    cache.clear_all()
    current_app.logger.info("All cache cleared")
    return jsonify({"success": True, "message": "All cache cleared"})
