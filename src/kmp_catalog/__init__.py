"""KMP Catalog - Static site of Kotlin Multiplatform libraries."""

from importlib.metadata import version

from kmp_catalog.__main__ import _cli as main
from kmp_catalog.extractor import extract_libraries
from kmp_catalog.models import Catalog, LibraryRecord

__version__ = version("kmp-catalog")
__all__ = ["Catalog", "LibraryRecord", "extract_libraries", "main", "__version__"]
