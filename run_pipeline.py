"""
Main entry point for the catalog pipeline.

Run this file to scrape the catalog, load it once and print search results.
"""
import sys
from pathlib import Path

# Add src to path
sys.path.insert(0, str(Path(__file__).parent / "src"))

from catalogsearch.pipeline import main


if __name__ == "__main__":
    sys.exit(main())
