"""
Search Engine - Lexical product ranking, autocomplete and related terms.

Scoring is additive over query words:
- substring of the product text: +10, and +15 more if also in the name
- fuzzy: +similarity × 5 for every product word with similarity > 0.70
- synonym group hit: +7 per group term found in the product text
- category keyword hit: +5 per keyword of that category found in the text
Then the total is scaled by stock: ×1.2 when in stock, ×0.9 more when
stock is 1 or 2.
"""
import logging
from typing import Mapping, Optional, Sequence

from ..engine.models import Product
from .text_matching import normalize_search_term, string_similarity
from .vocabulary import CATEGORIES, SYNONYMS

logger = logging.getLogger(__name__)

EXACT_MATCH_SCORE = 10.0
NAME_MATCH_BONUS = 15.0
FUZZY_THRESHOLD = 0.7
FUZZY_WEIGHT = 5.0
SYNONYM_SCORE = 7.0
CATEGORY_SCORE = 5.0
IN_STOCK_BOOST = 1.2
LOW_STOCK_PENALTY = 0.9
LOW_STOCK_LEVEL = 2

RELATED_TERMS_LIMIT = 6


def _dedupe(items) -> list[str]:
    """Drop repeats, keeping first-seen order."""
    return list(dict.fromkeys(items))


class SearchEngine:
    """
    Ranks catalog products against free-text queries.

    The vocabulary tables are injected read-only mappings; the engine keeps
    no other state, so one instance can serve concurrent callers.
    """

    def __init__(
        self,
        store,
        synonyms: Optional[Mapping[str, Sequence[str]]] = None,
        categories: Optional[Mapping[str, Sequence[str]]] = None,
    ):
        self.store = store
        self.synonyms = SYNONYMS if synonyms is None else synonyms
        self.categories = CATEGORIES if categories is None else categories

    # ------------------------------------------------------------------
    # Search
    # ------------------------------------------------------------------
    def intelligent_search(self, query: str, max_results: int = 20) -> list[Product]:
        """
        Rank products for a query, best first.

        Blank queries return the first ``max_results`` products unranked.
        Equal scores keep catalog order.
        """
        products = self.store.list_products()
        if not query or not query.strip():
            return products[:max_results]

        query_words = normalize_search_term(query).split()

        scored = []
        for product in products:
            try:
                score = self.score_product(product, query_words)
            except Exception:
                logger.warning("Scoring failed for product %s; treating as no match", product.id, exc_info=True)
                continue
            if score > 0:
                scored.append((product, score))

        scored.sort(key=lambda pair: pair[1], reverse=True)
        return [product for product, _ in scored[:max_results]]

    def score_product(self, product: Product, query_words: Sequence[str]) -> float:
        """Relevance score for one product; 0 means no match."""
        product_text = normalize_search_term(f"{product.name} {product.description}")
        product_name = normalize_search_term(product.name)
        product_words = product_text.split()

        score = 0.0
        for word in query_words:
            if word in product_text:
                score += EXACT_MATCH_SCORE
                if word in product_name:
                    score += NAME_MATCH_BONUS

            for product_word in product_words:
                similarity = string_similarity(word, product_word)
                if similarity > FUZZY_THRESHOLD:
                    score += similarity * FUZZY_WEIGHT

            for key, members in self.synonyms.items():
                if word == key or word in members:
                    for term in (*members, key):
                        if term in product_text:
                            score += SYNONYM_SCORE

            for keywords in self.categories.values():
                if word in keywords:
                    for keyword in keywords:
                        if keyword in product_text:
                            score += CATEGORY_SCORE

        if product.stock > 0:
            score *= IN_STOCK_BOOST
            if product.stock <= LOW_STOCK_LEVEL:
                score *= LOW_STOCK_PENALTY

        return score

    # ------------------------------------------------------------------
    # Autocomplete and expansion
    # ------------------------------------------------------------------
    def get_search_suggestions(self, partial_query: str, max_suggestions: int = 5) -> list[str]:
        """Words from the catalog and vocabulary that complete the partial query."""
        if not partial_query or not partial_query.strip() or len(partial_query) < 2:
            return []

        prefix = normalize_search_term(partial_query)
        if not prefix:
            return []

        candidates = []
        for product in self.store.list_products():
            for word in normalize_search_term(f"{product.name} {product.description}").split(" "):
                if word.startswith(prefix) and len(word) > len(prefix):
                    candidates.append(word)

        for key, members in self.synonyms.items():
            if key.startswith(prefix):
                candidates.append(key)
            candidates.extend(m for m in members if m.startswith(prefix))

        return _dedupe(candidates)[:max_suggestions]

    def get_related_search_terms(self, query: str) -> list[str]:
        """Synonyms and same-category keywords for each word of the query."""
        related = []
        for word in normalize_search_term(query).split():
            for key, members in self.synonyms.items():
                if key == word:
                    related.extend(members[:3])
                elif word in members:
                    related.append(key)
                    related.extend([m for m in members if m != word][:2])

            for keywords in self.categories.values():
                if word in keywords:
                    related.extend([k for k in keywords if k != word][:3])

        return _dedupe(related)[:RELATED_TERMS_LIMIT]

    def get_intelligent_categories(self) -> list[str]:
        return list(self.categories.keys())

    def comprehensive_search(self, query: str, max_results: int = 10) -> dict:
        """Results, suggestions, related terms and categories in one payload."""
        results = self.intelligent_search(query, max_results)
        return {
            "query": query,
            "search_results": {"products": results, "count": len(results)},
            "suggestions": self.get_search_suggestions(query, 5),
            "related_terms": self.get_related_search_terms(query or ""),
            "categories": self.get_intelligent_categories(),
        }
