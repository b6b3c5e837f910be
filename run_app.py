"""
Start the Catalog Search web API on the Flask development server.

The product index is created up front so searches answer (with zero
matches) before the catalog has been loaded through /api/load.
"""
import sys
from pathlib import Path

# Add src to path
sys.path.insert(0, str(Path(__file__).parent / "src"))

from catalogsearch.api import create_app, prepare_index
from catalogsearch.config import Config
from catalogsearch.logger import get_logger

logger = get_logger(__name__)


def main():
    if Config.STORE_BACKEND == "memory":
        logger.warning("In-memory store: the index is lost on restart but the completion marker is kept")

    app = create_app()
    if not prepare_index(app):
        logger.warning(f"Searches fail until {Config.ELASTICSEARCH_URL} is reachable")

    logger.info(f"Serving catalog search on http://{Config.FLASK_HOST}:{Config.FLASK_PORT} (debug={Config.FLASK_DEBUG})")
    app.run(host=Config.FLASK_HOST, port=Config.FLASK_PORT, debug=Config.FLASK_DEBUG)


if __name__ == "__main__":
    main()
