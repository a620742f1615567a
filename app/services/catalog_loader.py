"""Catalog loader service with caching and validation.

This module loads the default provisioning catalog (the product, environments
and reference data a new team starts with) from YAML files, validates it
against Pydantic schemas, and caches the result.
"""

from pathlib import Path
from functools import lru_cache
from typing import Optional
import yaml
from pydantic import ValidationError

from app.schemas.catalog import ProvisioningCatalog
from app.logging_config import get_logger

logger = get_logger(__name__)


class CatalogNotFoundError(Exception):
    """Raised when a catalog file is not found."""
    pass


class CatalogValidationError(Exception):
    """Raised when a catalog fails validation."""
    pass


class CatalogLoader:
    """Service for loading and caching provisioning catalogs.

    Catalogs are loaded from YAML files in the app/catalogs/ directory and
    validated against Pydantic schemas. Results are cached.
    """

    def __init__(self, catalogs_dir: Optional[str] = None):
        """Initialize catalog loader.

        Args:
            catalogs_dir: Path to catalogs directory (defaults to app/catalogs)
        """
        if catalogs_dir is None:
            catalogs_dir = Path(__file__).parent.parent / "catalogs"

        self.catalogs_dir = Path(catalogs_dir)

        if not self.catalogs_dir.exists():
            logger.warning(f"Catalogs directory not found: {self.catalogs_dir}")

    @lru_cache(maxsize=16)
    def load_catalog(self, catalog_name: str = "default") -> ProvisioningCatalog:
        """Load and validate a catalog from YAML file.

        Args:
            catalog_name: Catalog identifier (YAML filename without .yaml)

        Returns:
            Validated ProvisioningCatalog object

        Raises:
            CatalogNotFoundError: If catalog file doesn't exist
            CatalogValidationError: If catalog fails validation
        """
        yaml_path = self.catalogs_dir / f"{catalog_name}.yaml"

        if not yaml_path.exists():
            logger.error(f"Catalog file not found: {yaml_path}")
            raise CatalogNotFoundError(f"Catalog '{catalog_name}' not found at {yaml_path}")

        try:
            with open(yaml_path, 'r') as f:
                raw_data = yaml.safe_load(f)
        except yaml.YAMLError as e:
            logger.error(f"YAML parsing error for catalog {catalog_name}: {e}")
            raise CatalogValidationError(f"Invalid YAML in catalog '{catalog_name}': {e}")
        except OSError as e:
            logger.error(f"Error reading catalog file {yaml_path}: {e}")
            raise CatalogValidationError(f"Error reading catalog '{catalog_name}': {e}")

        if not isinstance(raw_data, dict):
            raise CatalogValidationError(f"Catalog '{catalog_name}' must be a mapping")

        try:
            catalog = ProvisioningCatalog(**raw_data)
            logger.info(
                f"Loaded catalog {catalog_name} with "
                f"{len(catalog.environments)} environments"
            )
            return catalog
        except ValidationError as e:
            logger.error(f"Validation error for catalog {catalog_name}: {e}")
            raise CatalogValidationError(f"Validation failed for catalog '{catalog_name}': {e}")


# Global singleton instance
_loader_instance: Optional[CatalogLoader] = None


def get_catalog_loader() -> CatalogLoader:
    """Get global CatalogLoader instance.

    Creates singleton instance on first call.

    Returns:
        Global CatalogLoader instance
    """
    global _loader_instance
    if _loader_instance is None:
        _loader_instance = CatalogLoader()
    return _loader_instance
