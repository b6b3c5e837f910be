"""
WSGI entry point for production deployment.

Use this file with a WSGI server like gunicorn:

    gunicorn wsgi:app --bind 0.0.0.0:5000 --workers 1
"""
import sys
from pathlib import Path

# Add src to path
sys.path.insert(0, str(Path(__file__).parent / "src"))

from catalogsearch.api import create_app, prepare_index

# Create the Flask application instance
app = create_app()
prepare_index(app)
