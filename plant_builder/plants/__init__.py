"""Plant record curation stages.

Note: keep imports lightweight; `plant_builder.config` imports the classifier
from here while building the vocabulary. Import submodules directly, e.g.:

    from plant_builder.plants import reconcile_duplicates
"""

__all__ = [
    "classify_attributes",
    "identity",
    "image_sync",
    "merge_records",
    "name_normalizer",
    "reconcile_duplicates",
    "run_pipeline",
    "scoring",
    "taxonomy_constants",
]
