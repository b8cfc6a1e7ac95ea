"""Curated vocabulary and rule tables for the plant record classifier.

Design intent:
- ENUMERATIONS: the closed set of values each classified field may hold.
- VALUE_VARIANTS: free-text spellings found in the corpus, mapped onto the
  enumerated value (ordered; the first containing variant wins).
- ATTRIBUTE_RULE_SEED: ordered (field, value, source, patterns) rules. The
  classifier evaluates sources in priority order (tags, taxonomy, keywords,
  derived attributes, defaults); within a source the table order decides.
- PROPAGATION_RULE_SEED: decision table for the multi-valued propagation field.
- NON_PLANT_*: product listings that are not plants.

Everything here is read-only data; `config.load_vocabulary()` wraps it into an
immutable `Vocabulary` that is passed to the filters and the classifier.
"""

from __future__ import annotations

CLASSIFIED_FIELDS: tuple[str, ...] = (
    "plant_type",
    "growth_habit",
    "growth_pattern",
    "hazard",
    "rarity",
    "flowering_period",
    "co2",
)

ENUMERATIONS: dict[str, tuple[str, ...]] = {
    "plant_type": (
        "flowering-plant",
        "conifer",
        "fern",
        "spikemoss",
        "moss",
        "liverwort",
        "algae",
        "fungus",
    ),
    "growth_pattern": (
        "upright-columnar",
        "upright-bushy",
        "upright-single-stem",
        "vining-climbing",
        "vining-trailing",
        "rosette",
        "clumping",
        "carpeting",
        "spreading",
        "pendent",
    ),
    "growth_habit": (
        "ground-dwelling",
        "tree-dwelling",
        "rock-dwelling",
        "fully-aquatic",
        "emergent-aquatic",
        "semi-aquatic",
        "semi-epiphytic",
    ),
    "hazard": ("non-toxic", "toxic-if-ingested", "handle-with-care"),
    "rarity": ("common", "uncommon", "rare", "very-rare"),
    "flowering_period": (
        "seasonal",
        "year-round",
        "irregular",
        "does-not-flower",
        "does-not-flower-in-cultivation",
    ),
    "co2": ("not-required", "beneficial", "recommended", "required"),
}

# Free-text value -> enumerated value. Order matters for containment matching:
# "semi-aquatic" must be tried before "aquatic", "non-toxic" before "toxic".
VALUE_VARIANTS: dict[str, dict[str, tuple[str, ...]]] = {
    "plant_type": {
        "spikemoss": ("lycophyte", "clubmoss", "club moss", "spike-moss", "spike moss", "selaginella", "lycopodium"),
        "liverwort": ("liverworts", "marchantiophyta", "bryophyte-liverwort"),
        "moss": ("mosses", "bryophyte-moss", "bryophyte"),
        "fern": ("ferns", "pteridophyte"),
        "algae": ("alga", "seaweed"),
        "fungus": ("fungi", "mushroom"),
        "conifer": ("gymnosperm", "cycad", "ginkgo", "cone-bearing"),
        "flowering-plant": (
            "flowering plant",
            "flowering",
            "angiosperm",
            "orchid",
            "bromeliad",
            "carnivorous plant",
            "cactus",
            "cacti",
            "succulent",
            "herbaceous",
            "vine",
            "shrub",
            "tree",
        ),
    },
    "growth_habit": {
        "semi-epiphytic": ("hemiepiphytic", "hemiepiphyte", "terrestrial/epiphytic", "epiphytic/terrestrial", "semi-epiphyte"),
        "semi-aquatic": ("aquatic or semi-aquatic", "amphibious", "both-aquatic-terrestrial"),
        "emergent-aquatic": ("aquatic-emergent", "emergent", "marginal", "partially-submerged"),
        "fully-aquatic": ("aquatic-submerged", "submerged", "fully aquatic", "underwater", "aquatic"),
        "tree-dwelling": ("epiphytic", "epiphyte", "air plant", "tree-growing"),
        "rock-dwelling": ("lithophytic", "lithophyte", "rock-growing", "rock"),
        "ground-dwelling": ("terrestrial", "soil-dwelling", "saprotrophic", "ground", "soil"),
    },
    "growth_pattern": {
        "upright-columnar": ("upright/columnar", "upright columnar", "columnar", "tree-like"),
        "upright-single-stem": ("upright single stem", "single-stem", "tree form"),
        "vining-climbing": ("climbing/trailing", "trailing/climbing", "climbing/shingling", "vining/climbing", "climbing"),
        "vining-trailing": ("upright/pendent", "trailing", "vining", "hanging"),
        "pendent": ("pendent-form",),
        "rosette": ("rosette-forming", "rosette forming", "upright/rosette", "creeping/rosette", "floating/whorled"),
        "carpeting": (
            "creeping/mat-forming",
            "surface-spreading/mat-forming",
            "trailing/mat-forming",
            "creeping/ground-cover",
            "ground cover",
            "mat-forming",
            "carpet",
        ),
        "clumping": ("clump-forming", "clump forming", "clustering", "scattered to clustered", "cushion", "clump"),
        "spreading": ("creeping/prostrate", "low/spreading", "branching/spreading", "creeping"),
        "upright-bushy": ("upright/bushy", "upright bushy", "upright/clumping", "compact/bushy", "upright/arching", "bushy", "upright"),
    },
    "hazard": {
        "non-toxic": ("non toxic", "not toxic", "non-toxic to pets", "pet-safe", "pet safe", "safe"),
        "handle-with-care": ("handle with care", "skin irritation", "irritant", "caution", "sharp spines", "spines"),
        "toxic-if-ingested": ("toxic if ingested", "toxic if eaten", "poisonous", "inedible", "toxic"),
    },
    "rarity": {
        "very-rare": ("very rare", "extremely rare", "critically endangered"),
        "uncommon": ("less common", "uncommon"),
        "rare": ("scarce", "endangered", "threatened", "rare"),
        "common": ("widely cultivated", "common"),
    },
    "flowering_period": {
        "does-not-flower-in-cultivation": (
            "does not flower in cultivation",
            "rarely flowers",
            "seldom flowers",
        ),
        "does-not-flower": ("does not flower", "non-flowering", "no flowers"),
        "year-round": ("year round", "all year", "continuous"),
        "irregular": ("irregular in cultivation", "irregular", "sporadic", "unpredictable"),
        "seasonal": ("spring-summer", "summer-fall", "spring", "summer", "fall", "autumn", "winter"),
    },
    "co2": {
        "not-required": ("not required", "not needed", "no co2", "none"),
        "recommended": ("recommended", "suggested"),
        "required": ("required", "necessary", "essential"),
        "beneficial": ("beneficial", "helpful", "optional"),
    },
}

FERN_FAMILIES: tuple[str, ...] = (
    "aspleniaceae",
    "athyriaceae",
    "blechnaceae",
    "cyatheaceae",
    "davalliaceae",
    "dennstaedtiaceae",
    "dryopteridaceae",
    "hymenophyllaceae",
    "lindsaeaceae",
    "lomariopsidaceae",
    "lygodiaceae",
    "marsileaceae",
    "nephrolepidaceae",
    "ophioglossaceae",
    "osmundaceae",
    "polypodiaceae",
    "pteridaceae",
    "salviniaceae",
    "tectariaceae",
    "thelypteridaceae",
)

# Common terrarium families; anything in class Magnoliopsida/Liliopsida is caught separately.
FLOWERING_FAMILIES: tuple[str, ...] = (
    "acanthaceae",
    "araceae",
    "begoniaceae",
    "bromeliaceae",
    "cactaceae",
    "crassulaceae",
    "droseraceae",
    "gesneriaceae",
    "lentibulariaceae",
    "marantaceae",
    "melastomataceae",
    "moraceae",
    "nepenthaceae",
    "orchidaceae",
    "piperaceae",
    "sarraceniaceae",
    "urticaceae",
)

AQUATIC_HABITS: tuple[str, ...] = ("fully-aquatic", "emergent-aquatic", "semi-aquatic")

# Hazard guardrails (genus beats family).
TOXIC_GENERA: tuple[str, ...] = (
    "adenium",
    "aglaonema",
    "alocasia",
    "anthurium",
    "dieffenbachia",
    "epipremnum",
    "euphorbia",
    "monstera",
    "nerium",
    "philodendron",
    "scindapsus",
    "spathiphyllum",
    "syngonium",
    "zantedeschia",
)

NON_TOXIC_GENERA: tuple[str, ...] = (
    "chlorophytum",
    "crassula",
    "echeveria",
    "fittonia",
    "haworthia",
    "hoya",
    "oxalis",
    "peperomia",
    "pilea",
    "sedum",
    "stapelia",
    "tillandsia",
    "tradescantia",
)

TOXIC_FAMILIES: tuple[str, ...] = ("araceae", "apocynaceae", "solanaceae", "liliaceae", "asparagaceae")

NON_TOXIC_FAMILIES: tuple[str, ...] = (
    "acanthaceae",
    "bromeliaceae",
    "lythraceae",
    "orchidaceae",
    "plantaginaceae",
    "polypodiaceae",
)

NON_FLOWERING_TYPES: tuple[str, ...] = ("fern", "spikemoss", "moss", "liverwort", "algae", "fungus", "conifer")

# (field, value, source, patterns)
#
# Sources:
# - "tag": exact match against the lowercased category/type tags
# - "kingdom" .. "genus": exact match against the lowercased taxonomy rank
#   (genus falls back to the first word of the scientific name)
# - "names": regex search over name + scientific name
# - "text": regex search over name + scientific name + description
# - "description": regex search over the description only
#   (keyword patterns prefixed with "!" veto the rule when they match)
# - "plant_type", "growth_habit", ...: exact match against a value classified
#   earlier in the same pass
# - "default": always matches
ATTRIBUTE_RULE_SEED: list[tuple[str, str, str, tuple[str, ...]]] = [
    # plantType
    ("plant_type", "spikemoss", "tag", ("spikemoss", "spike-moss", "clubmoss", "lycophyte", "selaginella")),
    ("plant_type", "liverwort", "tag", ("liverwort", "liverworts")),
    ("plant_type", "moss", "tag", ("moss", "mosses")),
    ("plant_type", "fern", "tag", ("fern", "ferns")),
    ("plant_type", "algae", "tag", ("algae", "alga", "seaweed")),
    ("plant_type", "fungus", "tag", ("fungus", "fungi", "mushroom")),
    ("plant_type", "conifer", "tag", ("conifer", "gymnosperm", "cycad")),
    (
        "plant_type",
        "flowering-plant",
        "tag",
        ("orchid", "orchids", "cactus", "cacti", "succulent", "succulents", "bromeliad", "bromeliads",
         "carnivorous", "air-plant", "air-plants", "flowering"),
    ),
    ("plant_type", "spikemoss", "family", ("selaginellaceae", "lycopodiaceae")),
    ("plant_type", "spikemoss", "class", ("lycopodiopsida", "selaginellopsida")),
    ("plant_type", "spikemoss", "genus", ("selaginella", "lycopodium", "huperzia")),
    ("plant_type", "fern", "family", FERN_FAMILIES),
    ("plant_type", "fern", "class", ("polypodiopsida", "filicopsida")),
    ("plant_type", "fern", "phylum", ("pteridophyta", "monilophyta")),
    ("plant_type", "moss", "phylum", ("bryophyta",)),
    ("plant_type", "liverwort", "phylum", ("marchantiophyta",)),
    ("plant_type", "algae", "phylum", ("chlorophyta", "charophyta", "rhodophyta")),
    ("plant_type", "fungus", "kingdom", ("fungi",)),
    ("plant_type", "conifer", "class", ("pinopsida", "cycadopsida", "ginkgoopsida", "gnetopsida")),
    ("plant_type", "flowering-plant", "family", FLOWERING_FAMILIES),
    ("plant_type", "flowering-plant", "class", ("magnoliopsida", "liliopsida")),
    ("plant_type", "flowering-plant", "phylum", ("magnoliophyta", "angiospermae")),
    # Spanish moss, Irish moss and friends are flowering plants.
    ("plant_type", "flowering-plant", "genus", ("tillandsia", "sagina", "soleirolia")),
    ("plant_type", "spikemoss", "names", (r"\bselaginella\b", r"\blycopodium\b", r"\bspike\s?moss\b", r"\bclub\s?moss\b")),
    ("plant_type", "liverwort", "names", (r"\bliverworts?\b", r"\briccia\b", r"\bmarchantia\b", r"\bmonosolenium\b", r"\bpellia\b")),
    ("plant_type", "algae", "names", (r"\balgae?\b", r"\bseaweed\b", r"\bmarimo\b", r"\bcladophora\b", r"\baegagropila\b")),
    ("plant_type", "fungus", "names", (r"\bfung(us|i)\b", r"\bmushrooms?\b", r"\bmycena\b", r"\bpanellus\b")),
    ("plant_type", "fern", "names", (r"\bferns?\b", r"!\basparagus\b")),
    ("plant_type", "moss", "names", (r"\bmoss(es)?\b", r"!\b(spanish|irish|scotch) moss\b")),
    ("plant_type", "conifer", "names", (r"\bconifers?\b", r"\bcycads?\b", r"\bginkgo\b", r"\bpodocarpus\b")),
    (
        "plant_type",
        "flowering-plant",
        "names",
        (r"\borchids?\b", r"\bcact(us|i)\b", r"\bsucculents?\b", r"\bbromeliads?\b", r"\bbegonias?\b", r"\bflowering\b"),
    ),
    # growthHabit
    ("growth_habit", "semi-epiphytic", "tag", ("hemiepiphyte", "hemiepiphytic", "semi-epiphytic")),
    ("growth_habit", "emergent-aquatic", "tag", ("emergent", "marginal", "bog")),
    ("growth_habit", "semi-aquatic", "tag", ("semi-aquatic", "amphibious")),
    ("growth_habit", "fully-aquatic", "tag", ("aquatic", "aquarium", "submerged")),
    ("growth_habit", "tree-dwelling", "tag", ("epiphyte", "epiphytic", "air-plant", "air-plants", "air plant")),
    ("growth_habit", "rock-dwelling", "tag", ("lithophyte", "lithophytic")),
    ("growth_habit", "ground-dwelling", "tag", ("terrestrial",)),
    ("growth_habit", "tree-dwelling", "genus", ("tillandsia",)),
    ("growth_habit", "tree-dwelling", "family", ("orchidaceae", "bromeliaceae")),
    ("growth_habit", "semi-epiphytic", "text", (r"\bhemi-?epiphyt", r"\bsemi-epiphyt", r"\bstarts? (life )?as an epiphyte\b")),
    ("growth_habit", "emergent-aquatic", "text", (r"\bemergent\b", r"\bmarginal plant", r"\babove the water", r"\bpartially[- ]submerged\b")),
    ("growth_habit", "semi-aquatic", "text", (r"\bsemi-aquatic\b", r"\bamphibious\b", r"\bemersed or submersed\b", r"\bsubmersed or emersed\b")),
    ("growth_habit", "fully-aquatic", "text", (r"\bfully aquatic\b", r"\bsubmerged\b", r"\bunderwater\b", r"\baquatic\b")),
    ("growth_habit", "tree-dwelling", "text", (r"\bepiphyt", r"\bgrows? on trees\b", r"\bair plants?\b", r"\btree-dwelling\b", r"\baerial roots\b")),
    ("growth_habit", "rock-dwelling", "text", (r"\blithophyt", r"\bgrows? on rocks\b", r"\brock-dwelling\b")),
    ("growth_habit", "ground-dwelling", "text", (r"\bterrestrial\b", r"\bgrows? in soil\b", r"\bforest floor\b", r"\bground-dwelling\b")),
    # growthPattern
    ("growth_pattern", "vining-climbing", "tag", ("climber", "climbing")),
    ("growth_pattern", "vining-trailing", "tag", ("creeper", "vining", "trailing")),
    ("growth_pattern", "carpeting", "tag", ("carpeting", "carpet")),
    ("growth_pattern", "rosette", "tag", ("rosette",)),
    ("growth_pattern", "clumping", "tag", ("clumping",)),
    ("growth_pattern", "vining-climbing", "text", (r"\bclimb(s|ing|er)?\b",)),
    ("growth_pattern", "pendent", "text", (r"\bpendent\b", r"\bpendulous\b")),
    ("growth_pattern", "vining-trailing", "text", (r"\btrailing\b", r"\btrails\b", r"\bhangs\b", r"\bcascad(es|ing)\b")),
    ("growth_pattern", "upright-columnar", "text", (r"\bcolumnar\b", r"\btree-like\b")),
    ("growth_pattern", "rosette", "text", (r"\brosettes?\b",)),
    (
        "growth_pattern",
        "carpeting",
        "text",
        (r"\bcarpet(s|ing)?\b", r"\bground ?cover\b", r"\bmat-forming\b", r"\bforms? (a )?(dense )?mats?\b"),
    ),
    ("growth_pattern", "clumping", "text", (r"\bclump-forming\b", r"\bclumping\b", r"\bforms? clumps\b", r"\bclustering\b")),
    ("growth_pattern", "spreading", "text", (r"\bspreading\b", r"\bcreeping\b", r"\bcreeps\b")),
    ("growth_pattern", "upright-single-stem", "text", (r"\bsingle stem\b", r"\bsingle-stemmed\b")),
    ("growth_pattern", "upright-bushy", "text", (r"\bbushy\b", r"\bshrubby\b", r"\bshrub\b", r"\bupright\b")),
    ("growth_pattern", "carpeting", "plant_type", ("moss", "liverwort")),
    # hazard
    ("hazard", "handle-with-care", "tag", ("cactus", "cacti")),
    ("hazard", "toxic-if-ingested", "genus", TOXIC_GENERA),
    ("hazard", "non-toxic", "genus", NON_TOXIC_GENERA),
    ("hazard", "handle-with-care", "family", ("euphorbiaceae", "cactaceae")),
    ("hazard", "toxic-if-ingested", "family", TOXIC_FAMILIES),
    ("hazard", "non-toxic", "family", NON_TOXIC_FAMILIES),
    ("hazard", "non-toxic", "text", (r"\bnon-?toxic\b", r"\bnot toxic\b", r"\bpet[- ]safe\b", r"\bsafe for pets\b")),
    (
        "hazard",
        "handle-with-care",
        "text",
        (r"\b(irritant|caustic|toxic|milky) sap\b", r"\bskin irritation\b", r"\bsharp spines\b", r"\bspines\b"),
    ),
    ("hazard", "toxic-if-ingested", "text", (r"\btoxic\b", r"\bpoisonous\b", r"\bcalcium oxalate\b")),
    # rarity
    ("rarity", "very-rare", "tag", ("very-rare", "very rare")),
    ("rarity", "rare", "tag", ("rare",)),
    ("rarity", "very-rare", "text", (r"\bvery rare\b", r"\bextremely rare\b", r"\bcritically endangered\b")),
    (
        "rarity",
        "rare",
        "text",
        (r"\brare\b", r"\bendangered\b", r"\bthreatened\b", r"\bscarce\b", r"\blimited in cultivation\b"),
    ),
    ("rarity", "uncommon", "text", (r"\buncommon\b", r"\bless common\b")),
    (
        "rarity",
        "common",
        "text",
        (
            r"\bwidely (cultivated|available)\b",
            r"\bpopular (houseplant|ornamental|terrarium plant|aquarium plant)\b",
            r"\bcommon (houseplant|terrarium plant|aquarium plant)\b",
            r"\bcommonly (grown|cultivated|available)\b",
        ),
    ),
    ("rarity", "common", "default", ()),
    # floweringPeriod
    ("flowering_period", "does-not-flower", "tag", ("fern", "ferns", "moss", "mosses", "algae", "liverwort")),
    ("flowering_period", "irregular", "family", ("orchidaceae",)),
    (
        "flowering_period",
        "does-not-flower-in-cultivation",
        "text",
        (r"\b(rarely|seldom) (flowers|blooms)\b", r"\b(does not|doesn't|rarely) (flower|bloom) in cultivation\b"),
    ),
    ("flowering_period", "does-not-flower", "text", (r"\bdoes not (flower|bloom)\b", r"\bnon-flowering\b", r"\bflowerless\b")),
    (
        "flowering_period",
        "year-round",
        "text",
        (r"\b(flowers?|blooms?|flowering|blooming) (almost )?(year[- ]round|all year)\b", r"\byear[- ]round (flowers|blooms|flowering|blooming)\b"),
    ),
    ("flowering_period", "irregular", "text", (r"\b(flowers|blooms) (irregularly|sporadically)\b", r"\bsporadic (flowering|blooming)\b")),
    (
        "flowering_period",
        "seasonal",
        "text",
        (
            r"\b(flowers|blooms|flowering|blooming) (in|during) (spring|summer|autumn|fall|winter)\b",
            r"\b(spring|summer|autumn|fall|winter) (flowers|blooms|flowering|blooming)\b",
        ),
    ),
    ("flowering_period", "does-not-flower", "plant_type", NON_FLOWERING_TYPES),
    ("flowering_period", "seasonal", "plant_type", ("flowering-plant",)),
    # co2
    ("co2", "beneficial", "tag", ("aquarium", "aquatic")),
    ("co2", "not-required", "text", (r"\bco[2₂] (is )?not (required|needed|necessary)\b", r"\bno co[2₂]\b")),
    ("co2", "required", "text", (r"\b(requires|needs) co[2₂]\b", r"\bco[2₂] (injection )?(is )?required\b")),
    ("co2", "recommended", "text", (r"\bco[2₂] (injection )?(is )?recommended\b",)),
    ("co2", "beneficial", "text", (r"\bbenefits from co[2₂]\b", r"\bco[2₂] (injection|supplementation)\b")),
    ("co2", "beneficial", "growth_habit", AQUATIC_HABITS),
    ("co2", "not-required", "default", ()),
]

PROPAGATION_METHODS: tuple[str, ...] = (
    "Stem cuttings",
    "Leaf cuttings",
    "Division",
    "Offsets",
    "Pups",
    "Runners",
    "Layering",
    "Spores",
    "Seed",
    "Fragmentation",
    "Plantlets",
    "Rhizomes",
    "Mycelial culture",
)

# Free-text propagation phrases -> canonical method (first containing phrase wins).
PROPAGATION_VARIANTS: dict[str, tuple[str, ...]] = {
    "Leaf cuttings": ("leaf cuttings", "leaf-cuttings", "leaf cutting"),
    "Division": ("division", "dividing"),
    "Rhizomes": ("rhizome cuttings", "rhizomes", "corms", "tubers"),
    "Stem cuttings": ("stem cuttings", "stem-cuttings", "stem cutting", "pad cuttings", "cuttings", "cutting"),
    "Offsets": ("offsets", "offset", "chicks"),
    "Pups": ("pups", "pup", "keikis", "keiki"),
    "Runners": ("runners", "stolons", "stolon", "runner"),
    "Layering": ("air layering", "layering"),
    "Spores": ("spores", "spore"),
    "Seed": ("seeds", "seed"),
    "Fragmentation": ("fragmentation", "trimming and reattachment", "trimming", "fragments"),
    "Plantlets": ("plantlets", "spiderettes", "plantlet"),
    "Mycelial culture": ("mycelial culture", "mycelium"),
}

# (methods, requirements). Every requirement must hold; a requirement holds when
# any of its "|"-separated sources matches any value. Sources as above.
PROPAGATION_RULE_SEED: list[tuple[str, tuple[tuple[str, tuple[str, ...]], ...]]] = [
    ("Division, Fragmentation", (("plant_type|tag", ("moss", "mosses")), ("growth_habit", AQUATIC_HABITS))),
    ("Division, Spores", (("plant_type|tag", ("moss", "mosses", "liverwort", "liverworts")),)),
    ("Spores, Division", (("plant_type|tag", ("fern", "ferns")),)),
    ("Division, Fragmentation", (("plant_type|tag", ("algae",)),)),
    ("Mycelial culture", (("plant_type|tag", ("fungus", "fungi")),)),
    (
        "Division, Runners",
        (
            ("growth_habit|tag", AQUATIC_HABITS + ("aquatic", "aquarium")),
            ("growth_pattern", ("carpeting", "spreading")),
        ),
    ),
    ("Stem cuttings, Division", (("growth_habit|tag", AQUATIC_HABITS + ("aquatic", "aquarium")),)),
    ("Division, Pups, Seed", (("family|tag", ("orchidaceae", "orchid", "orchids")),)),
    ("Division, Offsets, Pups", (("growth_habit|tag", ("tree-dwelling", "air-plant", "air-plants", "epiphyte", "epiphytic")),)),
    (
        "Leaf cuttings, Stem cuttings, Offsets",
        (("tag|family", ("succulent", "succulents", "cactus", "cacti", "cactaceae", "crassulaceae")),),
    ),
    ("Stem cuttings, Layering", (("growth_pattern|tag", ("vining-climbing", "vining-trailing", "creeper", "vining")),)),
    ("Division, Stem cuttings", (("growth_pattern", ("carpeting",)),)),
    ("Division, Offsets", (("tag", ("bulb", "bulbs", "bulbous")),)),
    (
        "Stem cuttings, Division, Seed",
        (
            ("plant_type", ("flowering-plant",)),
            ("growth_pattern", ("upright-bushy", "upright-columnar", "upright-single-stem")),
        ),
    ),
]

PROPAGATION_FALLBACK = "Stem cuttings, Division"

# Product listings that slipped into the plant corpus. Whole-word, case-insensitive.
NON_PLANT_PATTERNS: tuple[str, ...] = (
    r"\bbundles?\b",
    r"\bkits?\b",
    r"\bpairs?\b",
    r"\bpacks?\b",
    r"\bcollections?\b",
    r"\bstarter\s+(set|kit|pack)\b",
    r"\bset\s+of\b",
    r"\bgift\s*cards?\b",
    r"\be-gift\b",
    r"\brescue\s+box\b",
    r"\bsubscription\s+box\b",
    r"\b(support|moss)\s+poles?\b",
    r"\bpots?\b(?![-\s]*marigolds?\b)",
    r"\bplanters?\b",
    r"\bsubstrates?\b",
    r"\bpotting\s+(mix|soil)\b",
    r"\bfertili[sz]ers?\b",
    r"\btools?\b",
    r"\bgrow\s+lights?\b",
    r"\blamps?\b",
    r"\bbooks?\b(?!-)",
    r"\baccessor(y|ies)\b",
    r"\bnoid\s*#",
    r"\bno\s+id\b",
    r"\bunknown\s+plant\b",
)

# Real plants whose names trip the patterns above.
NON_PLANT_EXCEPTIONS: tuple[str, ...] = (
    "alluaudia",
    "alocasia",
    "anthurium",
    "anubias",
    "artocarpus",
    "asparagus",
    "asplenium",
    "begonia",
    "calendula",
    "eucalyptus",
    "roridula",
)

# Care-field defaults written by the original import; a merge prefers real data over these.
CARE_PLACEHOLDERS: dict[str, tuple[str, ...]] = {
    "light_requirements": ("Bright Indirect to Medium Light",),
    "humidity": ("High (60-80%)",),
    "temperature": ("18-24°C", "18-24¬∞C"),
}

__all__ = [
    "AQUATIC_HABITS",
    "ATTRIBUTE_RULE_SEED",
    "CARE_PLACEHOLDERS",
    "CLASSIFIED_FIELDS",
    "ENUMERATIONS",
    "NON_PLANT_EXCEPTIONS",
    "NON_PLANT_PATTERNS",
    "PROPAGATION_FALLBACK",
    "PROPAGATION_METHODS",
    "PROPAGATION_RULE_SEED",
    "PROPAGATION_VARIANTS",
    "VALUE_VARIANTS",
]
