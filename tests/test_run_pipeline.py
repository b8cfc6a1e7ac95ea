from __future__ import annotations

import json

import pytest

from plant_builder.plants import run_pipeline as pipeline
from plant_builder.plants.run_pipeline import run_pipeline, validate_corpus
from plant_builder.schema import Enrichment, Taxonomy
from plant_builder.storage import ManifestWriteError, StagingArea

LONG_DESCRIPTION = (
    "A much longer description of over one hundred characters describing the jade plant "
    "in detail for scoring purposes."
)


def _read(path):
    return json.loads(path.read_text(encoding="utf-8"))


def _manifest_matches_directory(directory):
    manifest = _read(directory / "index.json")
    present = sorted(p.name for p in directory.glob("*.json") if p.name != "index.json")
    return manifest == {"count": len(present), "plants": present}


def test_jade_plant_end_to_end(write_corpus, settings):
    directory = write_corpus(
        {
            "jade-plant.json": {
                "id": None,
                "name": "Jade Plant",
                "scientificName": "Crassula ovata",
                "images": ["a.jpg"],
                "description": "short",
            },
            "jade.json": {
                "id": None,
                "name": "Jade",
                "scientificName": "Crassula ovata",
                "images": ["b.jpg", "c.jpg"],
                "description": LONG_DESCRIPTION,
            },
        }
    )

    report = run_pipeline(settings)

    assert not (directory / "jade-plant.json").exists()
    merged = _read(directory / "jade.json")
    assert merged["images"] == ["a.jpg", "b.jpg", "c.jpg"]
    assert merged["description"] == LONG_DESCRIPTION
    assert merged["name"] == "Jade"
    assert merged["propagation"]
    assert report.loaded == 2
    assert report.duplicate_groups == 1
    assert report.merged == 1
    assert report.removed == 1
    assert report.updated == 1
    assert report.manifest_count == 1
    assert _manifest_matches_directory(directory)


def test_variants_and_dedup_counts(write_corpus, settings):
    documents = {
        "begonia-rex.json": {"name": "Begonia rex", "scientificName": "Begonia rex"},
        "begonia-rex-escargot.json": {"name": "Begonia rex 'Escargot'", "scientificName": "Begonia rex 'Escargot'"},
        "pothos-1.json": {"name": "Pothos", "scientificName": "Epipremnum aureum", "description": "abc"},
        "pothos-2.json": {"name": "Golden Pothos", "scientificName": "Epipremnum aureum", "description": "abcdef"},
        "pothos-3.json": {"name": "Devils Ivy", "scientificName": "Epipremnum aureum"},
        "fittonia.json": {"name": "Nerve plant", "scientificName": "Fittonia albivenis"},
    }
    directory = write_corpus(documents)

    report = run_pipeline(settings)

    remaining = sorted(p.name for p in directory.glob("*.json") if p.name != "index.json")
    assert remaining == ["begonia-rex-escargot.json", "begonia-rex.json", "fittonia.json", "pothos-2.json"]
    assert report.merged == 2
    assert report.variants == 1
    escargot = _read(directory / "begonia-rex-escargot.json")
    assert escargot["variantInfo"]["baseSpecies"] == "begonia rex"
    assert escargot["variantInfo"]["isVariant"] is True
    assert "variantInfo" not in _read(directory / "begonia-rex.json")
    assert _manifest_matches_directory(directory)


def test_second_run_changes_nothing(write_corpus, settings):
    directory = write_corpus(
        {
            "a.json": {"name": "Java Fern", "scientificName": "Microsorum pteropus"},
            "b.json": {"name": "Java fern", "scientificName": "Microsorum pteropus", "images": ["x.jpg"]},
        }
    )
    run_pipeline(settings)
    snapshot = {p.name: p.read_text(encoding="utf-8") for p in directory.glob("*.json")}

    report = run_pipeline(settings)

    assert report.updated == 0
    assert report.merged == 0
    assert report.skipped == 1
    assert {p.name: p.read_text(encoding="utf-8") for p in directory.glob("*.json")} == snapshot


def test_malformed_files_are_skipped(write_corpus, settings):
    directory = write_corpus(
        {
            "broken.json": "{not json",
            "nameless.json": {"scientificName": "Pilea peperomioides"},
            "ok.json": {"name": "Chinese money plant", "scientificName": "Pilea peperomioides"},
        }
    )

    report = run_pipeline(settings)

    assert report.malformed == 2
    assert report.loaded == 1
    assert (directory / "broken.json").read_text(encoding="utf-8") == "{not json"
    assert _manifest_matches_directory(directory)


def test_non_plants_are_removed(write_corpus, settings):
    directory = write_corpus(
        {
            "kit.json": {"name": "Bioactive Terrarium Starter Kit"},
            "alocasia.json": {"name": "Alocasia Pink Dragon 4in pot", "scientificName": "Alocasia 'Pink Dragon'"},
        }
    )
    report = run_pipeline(settings)
    assert report.non_plants == 1
    assert not (directory / "kit.json").exists()
    assert (directory / "alocasia.json").exists()


def test_write_failure_is_counted_and_run_continues(write_corpus, settings, monkeypatch):
    directory = write_corpus(
        {
            "a.json": {"name": "Boston fern", "scientificName": "Nephrolepis exaltata"},
            "b.json": {"name": "Java moss", "scientificName": "Taxiphyllum barbieri"},
        }
    )
    original_stage = StagingArea.stage

    def flaky_stage(self, filename, text):
        if filename == "a.json":
            raise PermissionError("read-only")
        return original_stage(self, filename, text)

    monkeypatch.setattr(StagingArea, "stage", flaky_stage)

    report = run_pipeline(settings)

    assert report.errored == 1
    assert report.updated == 1
    assert "propagation" not in _read(directory / "a.json")
    assert _read(directory / "b.json")["plantType"] == "moss"
    assert _manifest_matches_directory(directory)


def test_manifest_failure_propagates(write_corpus, settings, monkeypatch):
    write_corpus({"a.json": {"name": "Boston fern"}})

    def broken_index(directory, index_name):
        raise ManifestWriteError("disk full")

    monkeypatch.setattr(pipeline, "write_index", broken_index)
    with pytest.raises(ManifestWriteError):
        run_pipeline(settings)


def test_dry_run_writes_nothing(write_corpus, settings):
    directory = write_corpus(
        {
            "a.json": {"name": "Jade", "scientificName": "Crassula ovata"},
            "b.json": {"name": "Jade plant", "scientificName": "Crassula ovata"},
        }
    )
    before = {p.name: p.read_text(encoding="utf-8") for p in directory.iterdir()}

    report = run_pipeline(settings.with_overrides(dry_run=True))

    assert {p.name: p.read_text(encoding="utf-8") for p in directory.iterdir()} == before
    assert report.merged == 1
    assert report.removed == 1
    assert report.manifest_count == 1


def test_separate_output_directory_leaves_input_alone(write_corpus, settings, tmp_path):
    directory = write_corpus(
        {
            "a.json": {"name": "Jade", "scientificName": "Crassula ovata"},
            "b.json": {"name": "Jade plant", "scientificName": "Crassula ovata"},
        }
    )
    output = tmp_path / "out"

    report = run_pipeline(settings.with_overrides(output_dir=output))

    assert sorted(p.name for p in directory.glob("*.json")) == ["a.json", "b.json"]
    assert sorted(p.name for p in output.glob("*.json")) == ["a.json", "index.json"]
    assert report.manifest_count == 1


def test_id_conflicts_and_assignment(write_corpus, settings):
    directory = write_corpus(
        {
            "a.json": {"id": 1, "name": "Boston fern", "scientificName": "Nephrolepis exaltata"},
            "b.json": {"id": 1, "name": "Java moss", "scientificName": "Taxiphyllum barbieri"},
            "c.json": {"name": "Nerve plant", "scientificName": "Fittonia albivenis"},
        }
    )
    report = run_pipeline(settings, assign_ids=True)
    ids = [_read(directory / name)["id"] for name in ("a.json", "b.json", "c.json")]
    assert ids == [1, 2, 3]
    assert report.id_reassigned == 2


def test_images_and_enrichment_collaborators(write_corpus, settings):
    folder = settings.images_dir / "crassula-ovata"
    folder.mkdir(parents=True)
    (folder / "crassula-ovata-1.jpg").write_bytes(b"")
    directory = write_corpus({"jade.json": {"name": "Jade", "scientificName": "Crassula ovata", "images": ["old.jpg"]}})

    class _StubEnricher:
        def fetch_enrichment(self, scientific_name):
            return Enrichment(
                description="Crassula ovata is a succulent plant native to South Africa.",
                accepted_taxonomy=Taxonomy(kingdom="Plantae", family="Crassulaceae", genus="Crassula"),
            )

    report = run_pipeline(settings, enricher=_StubEnricher(), sync_images=True)

    jade = _read(directory / "jade.json")
    assert jade["images"] == ["images/crassula-ovata/crassula-ovata-1.jpg"]
    assert jade["taxonomy"]["family"] == "Crassulaceae"
    assert jade["propagation"] == "Leaf cuttings, Stem cuttings, Offsets"
    assert report.images_synced == 1
    assert report.enriched == 1


def test_validate_corpus_reports_problems(write_corpus, settings):
    directory = write_corpus(
        {
            "a.json": {"id": 5, "name": "A", "plantType": "orchid"},
            "b.json": {"id": 5, "name": "B", "hazard": "toxic-if-ingested"},
            "c.json": "{",
        }
    )
    report = validate_corpus(directory, "index.json")
    assert report["violations"] == {"a.json": [("plantType", "orchid")]}
    assert report["duplicate_ids"] == {5: 2}
    assert report["malformed"] == ["c.json"]


def test_cultivar_without_dotted_marker_keeps_its_file(write_corpus, settings):
    directory = write_corpus(
        {
            "crassula-ovata.json": {"name": "Jade", "scientificName": "Crassula ovata", "description": LONG_DESCRIPTION},
            "crassula-ovata-hobbit.json": {"name": "Hobbit jade", "scientificName": "Crassula ovata cv Hobbit"},
            "crassula-ovata-compacta.json": {"name": "Compact jade", "scientificName": "Crassula ovata f. compacta"},
        }
    )

    report = run_pipeline(settings)

    assert report.merged == 0
    assert report.variants == 2
    assert _read(directory / "crassula-ovata.json")["scientificName"] == "Crassula ovata"
    assert _read(directory / "crassula-ovata-hobbit.json")["variantInfo"]["isVariant"] is True
    assert _read(directory / "crassula-ovata-compacta.json")["variantInfo"]["baseSpecies"] == "crassula ovata"
    assert _manifest_matches_directory(directory)


def test_mistyped_attribute_does_not_drop_the_record(write_corpus, settings):
    directory = write_corpus(
        {
            "a.json": {"name": "Jade", "scientificName": "Crassula ovata", "description": "x" * 200, "rarity": 3},
            "b.json": {"name": "Jade plant", "scientificName": "Crassula ovata", "description": "short", "co2": True},
        }
    )

    report = run_pipeline(settings)

    assert report.malformed == 0
    assert report.loaded == 2
    assert report.merged == 1
    assert not (directory / "b.json").exists()
    merged = _read(directory / "a.json")
    assert merged["rarity"] == "common"
    assert merged["co2"] == "not-required"
