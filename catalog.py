"""Parts catalog and JSON loaders for catalogs and builds."""
import json
import logging
import os
from dataclasses import dataclass

from models import (
    CPU, GPU, PSU, RAM, Build, Case, ComponentDataError, Cooler, Motherboard, Storage,
    part_from_dict,
)

logger = logging.getLogger(__name__)

# Catalog attribute -> component category
CATALOG_FIELDS = {
    "cpus": "cpu",
    "gpus": "gpu",
    "motherboards": "motherboard",
    "ram": "ram",
    "storage": "storage",
    "psus": "psu",
    "coolers": "cooler",
    "cases": "case",
}
_FIELD_FOR_CATEGORY = {category: name for name, category in CATALOG_FIELDS.items()}


@dataclass(frozen=True, kw_only=True)
class Catalog:
    """Candidate parts per category, already priced."""
    cpus: tuple[CPU, ...] = ()
    gpus: tuple[GPU, ...] = ()
    motherboards: tuple[Motherboard, ...] = ()
    ram: tuple[RAM, ...] = ()
    storage: tuple[Storage, ...] = ()
    psus: tuple[PSU, ...] = ()
    coolers: tuple[Cooler, ...] = ()
    cases: tuple[Case, ...] = ()

    def __post_init__(self):
        for name in CATALOG_FIELDS:
            object.__setattr__(self, name, tuple(getattr(self, name)))

    def parts(self, category: str) -> tuple:
        return getattr(self, _FIELD_FOR_CATEGORY[category])

    def __len__(self) -> int:
        return sum(len(getattr(self, name)) for name in CATALOG_FIELDS)

    @classmethod
    def from_dict(cls, data: dict) -> "Catalog":
        """Build a catalog from raw records. Malformed records are skipped."""
        kwargs = {}
        for name, category in CATALOG_FIELDS.items():
            parts = []
            for record in data.get(name) or []:
                try:
                    parts.append(part_from_dict(category, record))
                except ComponentDataError as e:
                    logger.warning(f"Skipping catalog record: {e}")
            kwargs[name] = tuple(parts)
        return cls(**kwargs)


def _read_json(path: str) -> dict:
    if not os.path.exists(path):
        logger.warning(f"File not found: {path}")
        return {}
    try:
        with open(path, "r", encoding="utf-8") as f:
            return json.load(f)
    except (json.JSONDecodeError, OSError) as e:
        logger.warning(f"Failed to read {path}: {e}")
        return {}


def load_catalog(path: str) -> Catalog:
    catalog = Catalog.from_dict(_read_json(path))
    logger.info(f"Catalog loaded: {len(catalog)} parts from {path}")
    return catalog


def load_build(path: str) -> Build | None:
    """Load a build record. Returns None when the file is missing or unreadable.

    Raises ComponentDataError when a part record breaks the data contract.
    """
    data = _read_json(path)
    if not data:
        return None
    return Build.from_dict(data)
