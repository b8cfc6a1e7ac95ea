from __future__ import annotations

import json

import pytest
from pydantic import ValidationError

from plant_builder.storage import (
    ManifestWriteError,
    StagingArea,
    StorageError,
    dump_record,
    iter_record_files,
    parse_record,
    read_record,
    remove_files,
    write_index,
)


def test_iter_record_files_skips_index_and_staging(plants_dir):
    (plants_dir / "b.json").write_text("{}", encoding="utf-8")
    (plants_dir / "a.json").write_text("{}", encoding="utf-8")
    (plants_dir / "index.json").write_text("{}", encoding="utf-8")
    (plants_dir / "notes.txt").write_text("", encoding="utf-8")
    with StagingArea(plants_dir) as staging:
        staging.stage("c.json", "{}")
        assert [p.name for p in iter_record_files(plants_dir)] == ["a.json", "b.json"]
    assert iter_record_files(plants_dir / "missing") == []


def test_parse_record_preserves_shape_and_unknown_fields():
    text = json.dumps(
        {
            "name": "Jade",
            "scientificName": "Crassula ovata",
            "images": ["a.jpg", "a.jpg", "b.jpg"],
            "customField": {"nested": True},
            "category": "Succulents",
            "id": 4,
        },
        indent=2,
    )
    record = parse_record(text)

    assert record.images == ["a.jpg", "b.jpg"]
    assert record.category == ["Succulents"]
    assert list(record.to_json_dict()) == ["name", "scientificName", "images", "customField", "category", "id"]
    assert record.to_json_dict()["customField"] == {"nested": True}


def test_dump_record_format(make_record):
    record = make_record(name="Chirita", description="Gesneriad – café")
    text = dump_record(record)
    assert text.endswith("}\n")
    assert "café" in text
    assert text.startswith('{\n  "name": "Chirita"')


@pytest.mark.parametrize(
    "text",
    [
        '{"scientificName": "Crassula ovata"}',
        '{"name": "Jade", "images": 5}',
        "[1, 2, 3]",
    ],
)
def test_parse_record_rejects_malformed_documents(text):
    with pytest.raises(ValidationError):
        parse_record(text)


def test_read_record(plants_dir):
    path = plants_dir / "jade.json"
    path.write_text('{"name": "Jade"}', encoding="utf-8")
    assert read_record(path).name == "Jade"


def test_staging_commit_replaces_target(plants_dir):
    target = plants_dir / "jade.json"
    target.write_text("old", encoding="utf-8")
    with StagingArea(plants_dir) as staging:
        staged = staging.stage("jade.json", "new")
        assert target.read_text(encoding="utf-8") == "old"
        assert staging.commit(staged) == target
    assert target.read_text(encoding="utf-8") == "new"
    assert not staging.path.exists()


def test_remove_files(plants_dir):
    present = plants_dir / "gone.json"
    present.write_text("{}", encoding="utf-8")
    removed, errors = remove_files([present, plants_dir / "never-there.json"])
    assert present in removed
    assert errors == []
    assert not present.exists()


def test_write_index_lists_files_present(plants_dir):
    for name in ("b.json", "a.json"):
        (plants_dir / name).write_text("{}", encoding="utf-8")

    manifest = write_index(plants_dir)

    assert manifest.count == 2
    assert json.loads((plants_dir / "index.json").read_text(encoding="utf-8")) == {
        "count": 2,
        "plants": ["a.json", "b.json"],
    }


def test_write_index_failure_raises_manifest_error(plants_dir):
    (plants_dir / "a.json").write_text("{}", encoding="utf-8")
    # A directory squatting on the manifest name makes the final rename fail.
    (plants_dir / "index.json").mkdir()
    (plants_dir / "index.json" / "keep").write_text("", encoding="utf-8")

    with pytest.raises(ManifestWriteError) as excinfo:
        write_index(plants_dir)
    assert isinstance(excinfo.value, StorageError)
    assert not (plants_dir / ".index.json.tmp").exists()


def test_parse_record_keeps_mistyped_enumerated_values_as_text():
    record = parse_record('{"name": "Jade", "rarity": 3, "co2": true, "hazard": ["toxic"], "plantType": null}')
    assert record.rarity == "3"
    assert record.co2 == "true"
    assert record.hazard is None
    assert record.plant_type is None
