from __future__ import annotations

from plant_builder.plants.merge_records import is_placeholder, merge, merge_group

LONG_DESCRIPTION = (
    "A much longer description of over one hundred characters describing the jade plant "
    "in detail for scoring purposes."
)


def test_merge_with_itself_is_a_no_op(make_record):
    record = make_record(
        name="Jade",
        scientificName="Crassula ovata",
        images=["a.jpg"],
        description="short",
        humidity="High (60-80%)",
    )
    merged = merge(record, record)
    assert merged.to_json_dict() == record.to_json_dict()
    assert merge(record, record.model_copy(deep=True)).to_json_dict() == record.to_json_dict()


def test_merge_field_rules(make_record):
    survivor = make_record(
        name="Jade",
        scientificName="Crassula ovata",
        description="short",
        images=["b.jpg", "c.jpg"],
        taxonomy={"family": "Crassulaceae"},
        lightRequirements="Bright Indirect to Medium Light",
        humidity="Low (30-40%)",
        temperature="",
        watering="Sparingly",
    )
    loser = make_record(
        name="Jade Plant",
        scientificName="Crassula ovata 'Gollum'",
        description=LONG_DESCRIPTION,
        images=["a.jpg", "b.jpg"],
        taxonomy={"kingdom": "Plantae", "family": "Crassulaceae", "genus": "Crassula"},
        lightRequirements="Full sun",
        humidity="High (60-80%)",
        temperature="18-24°C",
        watering="Often",
    )

    merged = merge(survivor, loser)

    assert merged.description == LONG_DESCRIPTION
    assert merged.scientific_name == "Crassula ovata 'Gollum'"
    assert merged.images == ["b.jpg", "c.jpg", "a.jpg"]
    assert merged.taxonomy.genus == "Crassula"
    assert merged.light_requirements == "Full sun"
    assert merged.humidity == "Low (30-40%)"
    # Loser's value is itself a placeholder, so the blank stays.
    assert merged.temperature == ""
    assert merged.watering == "Sparingly"
    assert merged.name == "Jade"
    # The survivor passed in is left untouched.
    assert survivor.description == "short"


def test_taxonomy_needs_strictly_more_ranks(make_record):
    survivor = make_record(taxonomy={"family": "Araceae", "genus": "Monstera"})
    loser = make_record(taxonomy={"family": "Araceae", "genus": "Rhaphidophora"})
    assert merge(survivor, loser).taxonomy.genus == "Monstera"


def test_merge_losers_in_either_order(make_record):
    survivor = make_record(name="S", scientificName="Pilea glauca", description="mid length text", images=["s.jpg"])
    first = make_record(name="L1", scientificName="Pilea glauca", description="x" * 40, images=["l1.jpg"])
    second = make_record(
        name="L2",
        scientificName="Pilea glauca 'Aquamarine'",
        description="short",
        images=["l2.jpg"],
        humidity="High, 70%+",
    )

    one_way = merge(merge(survivor, first), second)
    other_way = merge(merge(survivor, second), first)
    assert one_way.description == other_way.description == "x" * 40
    assert one_way.scientific_name == other_way.scientific_name == "Pilea glauca 'Aquamarine'"
    assert one_way.humidity == other_way.humidity == "High, 70%+"
    assert set(one_way.images) == set(other_way.images) == {"s.jpg", "l1.jpg", "l2.jpg"}

    grouped = merge_group(survivor, [first, second])
    assert grouped.to_json_dict() == merge_group(survivor, [second, first]).to_json_dict()


def test_merge_group_orders_images_by_load_order(make_record):
    jade_plant = make_record(name="Jade Plant", scientificName="Crassula ovata", images=["a.jpg"], description="short")
    jade = make_record(
        name="Jade",
        scientificName="Crassula ovata",
        images=["b.jpg", "c.jpg"],
        description=LONG_DESCRIPTION,
    )

    merged = merge_group(jade, [jade_plant], load_order=[jade_plant, jade])

    assert merged.images == ["a.jpg", "b.jpg", "c.jpg"]
    assert merged.description == LONG_DESCRIPTION
    assert merged.name == "Jade"


def test_is_placeholder():
    assert is_placeholder("humidity", "High (60-80%)")
    assert is_placeholder("humidity", "   ")
    assert is_placeholder("humidity", None)
    assert not is_placeholder("humidity", "Moderate")
    assert not is_placeholder("humidity", {"min": 60})
    assert is_placeholder("temperature", "18-24°C", {"temperature": ["18-24°C"]})
