"""
API routes for Catalog Search.
"""
import time
from typing import Any, Dict

from flask import Blueprint, current_app, jsonify, request
from pydantic import ValidationError

from ..config import Config
from ..errors import FetchError, IndexCreationError, SearchError
from ..logger import get_logger
from ..schemas.search import LoadRequest, LoadResponse, ProductSchema, SearchRequest, SearchResponse

logger = get_logger(__name__)

# Create blueprint
api_bp = Blueprint('api', __name__, url_prefix='/api')


def _components() -> Dict[str, Any]:
    return current_app.extensions['catalogsearch']


def _search_params() -> Dict[str, Any]:
    """Collect query/limit from the JSON body (POST) or the query string (GET)."""
    if request.method == 'POST':
        data = request.get_json(silent=True)
        if not isinstance(data, dict):
            # Arrays and scalars carry no query; SearchRequest rejects the blank
            data = {}
    else:
        data = request.args.to_dict()

    params = {'query': data.get('query', data.get('q', ''))}
    if data.get('limit') not in (None, ''):
        params['limit'] = data['limit']
    return params


@api_bp.route('/search', methods=['GET', 'POST'])
def search_products():
    """
    Search indexed products by name.

    Expected input: ``?q=badem&limit=10`` or JSON ``{"query": "badem", "limit": 10}``

    Returns:
    {
        "status": "success",
        "query": "badem",
        "products": [{"name": ..., "prices": [...], "quantities": [...], "score": ...}],
        "count": 1,
        "total": 1,
        "took_ms": 4
    }
    """
    try:
        params = SearchRequest(**_search_params())
    except ValidationError as e:
        return jsonify({
            'status': 'error',
            'message': 'Invalid search request',
            'errors': e.errors(include_url=False, include_context=False),
        }), 400

    started = time.perf_counter()
    try:
        result = _components()['engine'].search(params.query)
    except SearchError as e:
        return jsonify({
            'status': 'error',
            'message': f'Search failed: {e}',
            'query': params.query,
        }), 502

    shown = result.top(params.limit)
    response = SearchResponse(
        query=params.query,
        products=[ProductSchema(**hit.to_dict()) for hit in shown],
        count=len(shown),
        total=result.total,
        took_ms=int((time.perf_counter() - started) * 1000),
    )
    return jsonify(response.model_dump()), 200


@api_bp.route('/load', methods=['POST'])
def load_catalog():
    """
    Extract the catalog page and load it into the store (once per catalog).

    Expected JSON (optional):
    {
        "url": "https://example.com/Kategori"
    }
    """
    data = request.get_json(silent=True)
    if data is None:
        data = {}
    if not isinstance(data, dict):
        return jsonify({
            'status': 'error',
            'message': 'Invalid load request: body must be a JSON object',
        }), 400

    try:
        params = LoadRequest(**data)
    except ValidationError as e:
        return jsonify({
            'status': 'error',
            'message': 'Invalid load request',
            'errors': e.errors(include_url=False, include_context=False),
        }), 400

    url = params.url or Config.CATALOG_URL
    components = _components()

    try:
        products = components['extractor'].extract(url)
    except FetchError as e:
        return jsonify({
            'status': 'error',
            'message': f'Could not fetch catalog: {e}',
            'url': url,
        }), 502

    try:
        outcome = components['loader'].ensure_indexed(products)
    except IndexCreationError as e:
        return jsonify({
            'status': 'error',
            'message': f'Could not create index: {e}',
        }), 500

    counts = outcome.to_dict()
    response = LoadResponse(
        outcome=counts['outcome'],
        extracted=len(products),
        loaded=counts.get('loaded', 0),
        failed=counts.get('failed', 0),
    )
    logger.info(f"Load request for {url}: {response.outcome}")
    return jsonify(response.model_dump()), 200
