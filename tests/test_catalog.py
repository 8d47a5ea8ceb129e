# tests/test_catalog.py
import json

import pytest

from catalog import Catalog, load_build, load_catalog
from models import ComponentDataError


def _write(path, data):
    path.write_text(json.dumps(data))
    return str(path)


def test_load_catalog(tmp_path):
    path = _write(tmp_path / "catalog.json", {
        "cpus": [{"id": "c1", "name": "CPU", "price_usd": 200, "specs": {"socket": "AM5", "tier": 6}}],
        "psus": [{"id": "p1", "name": "PSU", "price_usd": 100, "specs": {"wattage_w": 750}}],
    })
    catalog = load_catalog(path)
    assert len(catalog) == 2
    assert catalog.cpus[0].specs.socket == "AM5"
    assert catalog.parts("psu")[0].specs.wattage_w == 750


def test_load_catalog_skips_malformed_records(tmp_path):
    path = _write(tmp_path / "catalog.json", {
        "cpus": [
            {"id": "good", "specs": {"socket": "AM5"}},
            {"id": "no-socket", "specs": {"cores": 8}},
        ],
    })
    catalog = load_catalog(path)
    assert [c.id for c in catalog.cpus] == ["good"]


def test_load_catalog_missing_file(tmp_path):
    assert len(load_catalog(str(tmp_path / "nope.json"))) == 0


def test_load_catalog_invalid_json(tmp_path):
    path = tmp_path / "broken.json"
    path.write_text("{not json")
    assert len(load_catalog(str(path))) == 0


def test_load_build(tmp_path):
    path = _write(tmp_path / "build.json", {
        "cpu": {"id": "c1", "specs": {"socket": "AM5"}},
        "motherboard": {"id": "m1", "specs": {"socket": "AM5", "form_factor": "ATX"}},
        "storage": [{"id": "s1", "specs": {"interface": "NVMe", "capacity_gb": 1000}}],
        "gpu": None,
    })
    build = load_build(path)
    assert build.cpu.id == "c1"
    assert build.gpu is None
    assert build.total_storage_gb == 1000


def test_load_build_missing_file_returns_none(tmp_path):
    assert load_build(str(tmp_path / "build.json")) is None


def test_load_build_invalid_part_raises(tmp_path):
    path = _write(tmp_path / "build.json", {"ram": {"id": "r1", "specs": {"capacity_gb": 32}}})
    with pytest.raises(ComponentDataError):
        load_build(path)


def test_catalog_from_dict_converts_lists():
    catalog = Catalog.from_dict({"gpus": [{"id": "g1", "specs": {"power_connectors": ["16-pin"]}}]})
    assert catalog.gpus[0].specs.power_connectors == ("16-pin",)
