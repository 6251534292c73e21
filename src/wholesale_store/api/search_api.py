"""
Search API - FastAPI router for product search, autocomplete and related terms.
"""
from fastapi import APIRouter, HTTPException, Query
from fastapi.encoders import jsonable_encoder
from typing import Optional

from ..engine.errors import InvalidArgumentError
from . import state

router = APIRouter(prefix="/api/search", tags=["search"])


@router.get("")
async def intelligent_search(
    query: Optional[str] = None,
    max_results: int = Query(20, alias="maxResults"),
):
    """Rank products for a free-text query."""
    if max_results < 1 or max_results > state.settings.search_max_results:
        raise HTTPException(
            status_code=400,
            detail=f"maxResults must be between 1 and {state.settings.search_max_results}",
        )

    results = state.search_engine.intelligent_search(query or "", max_results)
    return {
        "query": query,
        "result_count": len(results),
        "max_results": max_results,
        "products": jsonable_encoder(results),
    }


@router.get("/suggestions")
async def search_suggestions(
    partial: Optional[str] = None,
    max_suggestions: int = Query(5, alias="maxSuggestions"),
):
    """Autocomplete words for a partial query."""
    if max_suggestions < 1 or max_suggestions > state.settings.suggestions_max:
        raise HTTPException(
            status_code=400,
            detail=f"maxSuggestions must be between 1 and {state.settings.suggestions_max}",
        )

    suggestions = state.search_engine.get_search_suggestions(partial or "", max_suggestions)
    return {
        "partial_query": partial,
        "suggestions": suggestions,
        "suggestion_count": len(suggestions),
    }


@router.get("/categories")
async def categories():
    """Static category names."""
    names = state.search_engine.get_intelligent_categories()
    return {"categories": names, "category_count": len(names)}


@router.get("/related")
async def related_terms(query: Optional[str] = None):
    """Synonyms and same-category keywords for a query."""
    if not query or not query.strip():
        raise InvalidArgumentError("query", "parameter is required")

    terms = state.search_engine.get_related_search_terms(query)
    return {"original_query": query, "related_terms": terms, "related_count": len(terms)}


@router.get("/comprehensive")
async def comprehensive_search(query: Optional[str] = None):
    """Search results, suggestions, related terms and categories together."""
    payload = state.search_engine.comprehensive_search(query or "", state.settings.comprehensive_results)
    return jsonable_encoder(payload)
