"""
Flask application factory for Catalog Search.
"""
from typing import Optional

from flask import Flask
from flask_cors import CORS

from .. import __version__
from ..completion import CompletionStore
from ..config import Config
from ..errors import IndexCreationError
from ..extractors.catalog_extractor import CatalogExtractor
from ..loader import LoadController
from ..logger import get_logger
from ..pipeline import build_query_engine, default_completion
from ..store import DocumentStore, build_store
from .routes import api_bp

logger = get_logger(__name__)


def create_app(
    store: Optional[DocumentStore] = None,
    extractor: Optional[CatalogExtractor] = None,
    completion: Optional[CompletionStore] = None,
) -> Flask:
    """
    Create and configure Flask application.

    Args:
        store: Document store (built from Config when omitted)
        extractor: Catalog extractor for /api/load
        completion: Completion marker for /api/load

    Returns:
        Configured Flask app instance
    """
    app = Flask(__name__)
    app.config['ENV'] = Config.FLASK_ENV

    # Enable CORS with configured origins
    cors_origins = Config.get_cors_origins()
    if cors_origins == ["*"]:
        CORS(app)
    else:
        CORS(app, origins=cors_origins)

    store = store if store is not None else build_store(Config.STORE_BACKEND, url=Config.ELASTICSEARCH_URL)
    app.extensions['catalogsearch'] = {
        'store': store,
        'engine': build_query_engine(store),
        'extractor': extractor or CatalogExtractor(timeout_s=Config.REQUEST_TIMEOUT_S),
        'loader': LoadController(store, completion or default_completion(), Config.INDEX_NAME),
    }

    app.register_blueprint(api_bp)

    @app.route('/health')
    def health():
        """Health check endpoint."""
        return {'status': 'healthy', 'version': __version__}

    logger.info("Flask app created")
    logger.info(f"Configuration: {Config.get_summary()}")

    errors = Config.validate()
    if errors:
        logger.warning(f"Configuration warnings: {errors}")

    return app


def prepare_index(app: Flask) -> bool:
    """
    Create the product index before serving so /api/search works ahead of the first load.

    Returns:
        False if the store could not be reached; the app still serves and
        /api/load retries the creation.
    """
    try:
        created = app.extensions['catalogsearch']['loader'].ensure_index()
    except IndexCreationError as e:
        logger.error(f"Could not prepare index {Config.INDEX_NAME}: {e}")
        return False
    logger.info(f"Index {Config.INDEX_NAME} {'created' if created else 'ready'} on {Config.STORE_BACKEND} store")
    return True
