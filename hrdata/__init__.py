"""
Package for managing this repository's data, including generating the
search indexes for the site and enriching location data with information
from external sources (Wikidata and the Croatian Wikipedia).

The top level package module only contains information about file paths
in the overall project.
"""

from pathlib import Path

PROJECT_ROOT = Path(__file__).resolve().parent.parent
SOURCE_DATA_DIR = PROJECT_ROOT / 'src' / 'data'
PUBLIC_DIR = PROJECT_ROOT / 'public'
SITE_CONFIG_PATH = PROJECT_ROOT / 'site.config.json'
