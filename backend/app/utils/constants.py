"""
Centralized constants and reference data.

This module contains all hardcoded keyword tables, marker lists, and scoring
defaults used by the ingredient analysis engine. The tables are declared in a
fixed order and are never mutated at runtime; detection output follows this
declaration order.

Categories:
- Allergen keyword table
- Additive keyword table
- Clean label score markers
- Health risk scoring weights and thresholds
"""

from typing import Dict, List, Tuple

# ==============================================================================
# ALLERGEN DATABASE
# ==============================================================================

ALLERGEN_DATABASE: Tuple[Dict, ...] = (
    {
        "name": "Wheat/Gluten",
        "keywords": [
            "wheat", "gluten", "flour", "semolina", "durum", "spelt", "kamut",
            "farina", "couscous", "bulgur", "seitan"
        ],
        "severity": "high",
    },
    {
        "name": "Milk/Dairy",
        "keywords": [
            "milk", "cream", "butter", "cheese", "whey", "casein", "lactose",
            "yogurt", "ghee", "curd"
        ],
        "severity": "high",
    },
    {
        "name": "Soy",
        "keywords": [
            "soy", "soya", "soybean", "edamame", "tofu", "tempeh", "miso",
            "soy lecithin", "soy protein"
        ],
        "severity": "high",
    },
    {
        "name": "Egg",
        "keywords": [
            "egg", "albumin", "globulin", "lysozyme", "mayonnaise", "meringue",
            "ovalbumin", "ovomucin"
        ],
        "severity": "high",
    },
    {
        "name": "Tree Nuts",
        "keywords": [
            "almond", "cashew", "walnut", "pecan", "pistachio", "macadamia",
            "hazelnut", "brazil nut", "chestnut", "pine nut"
        ],
        "severity": "high",
    },
    {
        "name": "Peanut",
        "keywords": ["peanut", "groundnut", "arachis"],
        "severity": "high",
    },
    {
        "name": "Fish",
        "keywords": [
            "fish", "cod", "salmon", "tuna", "anchovy", "sardine", "tilapia",
            "bass", "trout"
        ],
        "severity": "medium",
    },
    {
        "name": "Shellfish",
        "keywords": [
            "shrimp", "crab", "lobster", "clam", "mussel", "oyster", "scallop",
            "crawfish", "prawn"
        ],
        "severity": "medium",
    },
    {
        "name": "Sesame",
        "keywords": ["sesame", "tahini", "halvah"],
        "severity": "medium",
    },
    {
        "name": "Sulfites",
        "keywords": [
            "sulfite", "sulphite", "sulfur dioxide", "sodium bisulfite",
            "sodium metabisulfite", "potassium bisulfite"
        ],
        "severity": "low",
    },
)


SEVERITY_LEVELS: List[str] = ["high", "medium", "low"]


# ==============================================================================
# ADDITIVE DATABASE
# ==============================================================================

ADDITIVE_TYPES: List[str] = [
    "preservative", "color", "flavor", "sweetener",
    "emulsifier", "stabilizer", "antioxidant"
]

ADDITIVE_DATABASE: Tuple[Dict, ...] = (
    # Preservatives
    {
        "name": "Sodium Benzoate",
        "type": "preservative",
        "risk_level": "medium",
        "description": "Common preservative linked to hyperactivity when combined with colors",
        "keywords": ["sodium benzoate", "e211"],
    },
    {
        "name": "Potassium Sorbate",
        "type": "preservative",
        "risk_level": "low",
        "description": "Widely used preservative, generally recognized as safe",
        "keywords": ["potassium sorbate", "e202"],
    },
    {
        "name": "Sodium Nitrite",
        "type": "preservative",
        "risk_level": "high",
        "description": "Used in processed meats, linked to carcinogenic nitrosamines",
        "keywords": ["sodium nitrite", "e250", "sodium nitrate", "e251"],
    },
    {
        "name": "BHA",
        "type": "antioxidant",
        "risk_level": "high",
        "description": "Butylated hydroxyanisole, a potential endocrine disruptor",
        "keywords": ["bha", "butylated hydroxyanisole", "e320"],
    },
    {
        "name": "BHT",
        "type": "antioxidant",
        "risk_level": "medium",
        "description": "Butylated hydroxytoluene, a synthetic antioxidant",
        "keywords": ["bht", "butylated hydroxytoluene", "e321"],
    },
    {
        "name": "TBHQ",
        "type": "antioxidant",
        "risk_level": "medium",
        "description": "Tertiary butylhydroquinone, a petrochemical-derived preservative",
        "keywords": ["tbhq", "e319"],
    },
    {
        "name": "Sulfites",
        "type": "preservative",
        "risk_level": "medium",
        "description": "Can trigger asthma and allergic reactions",
        "keywords": [
            "sulfite", "sulphite", "sulfur dioxide", "sodium bisulfite",
            "sodium metabisulfite", "e220", "e221", "e222", "e223", "e224",
            "e225", "e226", "e227", "e228"
        ],
    },

    # Colors
    {
        "name": "Tartrazine (Yellow 5)",
        "type": "color",
        "risk_level": "high",
        "description": "Azo dye linked to hyperactivity in children",
        "keywords": ["tartrazine", "yellow 5", "e102", "fd&c yellow no. 5"],
    },
    {
        "name": "Sunset Yellow (Yellow 6)",
        "type": "color",
        "risk_level": "high",
        "description": "Synthetic azo dye, banned in some countries",
        "keywords": ["sunset yellow", "yellow 6", "e110", "fd&c yellow no. 6"],
    },
    {
        "name": "Allura Red (Red 40)",
        "type": "color",
        "risk_level": "high",
        "description": "Most widely used food dye, linked to behavioral issues",
        "keywords": ["allura red", "red 40", "e129", "fd&c red no. 40"],
    },
    {
        "name": "Brilliant Blue (Blue 1)",
        "type": "color",
        "risk_level": "medium",
        "description": "Synthetic dye derived from petroleum",
        "keywords": ["brilliant blue", "blue 1", "e133", "fd&c blue no. 1"],
    },
    {
        "name": "Caramel Color",
        "type": "color",
        "risk_level": "medium",
        "description": "Some types contain 4-MEI, a potential carcinogen",
        "keywords": ["caramel color", "caramel colour", "e150"],
    },

    # Flavor enhancers
    {
        "name": "MSG",
        "type": "flavor",
        "risk_level": "medium",
        "description": "Monosodium glutamate, can cause sensitivity reactions",
        "keywords": ["monosodium glutamate", "msg", "e621"],
    },
    {
        "name": "Disodium Inosinate",
        "type": "flavor",
        "risk_level": "low",
        "description": "Often used with MSG as synergistic flavor enhancer",
        "keywords": ["disodium inosinate", "e631"],
    },

    # Sweeteners
    {
        "name": "Aspartame",
        "type": "sweetener",
        "risk_level": "medium",
        "description": "Artificial sweetener, IARC classified as possible carcinogen",
        "keywords": ["aspartame", "e951"],
    },
    {
        "name": "Sucralose",
        "type": "sweetener",
        "risk_level": "low",
        "description": "Non-caloric sweetener, 600x sweeter than sugar",
        "keywords": ["sucralose", "e955"],
    },
    {
        "name": "Acesulfame K",
        "type": "sweetener",
        "risk_level": "medium",
        "description": "Often combined with other sweeteners, limited long-term studies",
        "keywords": ["acesulfame", "acesulfame potassium", "ace-k", "e950"],
    },
    {
        "name": "High Fructose Corn Syrup",
        "type": "sweetener",
        "risk_level": "high",
        "description": "Linked to obesity, diabetes, and metabolic syndrome",
        "keywords": ["high fructose corn syrup", "hfcs", "corn syrup"],
    },

    # Emulsifiers
    {
        "name": "Carrageenan",
        "type": "emulsifier",
        "risk_level": "medium",
        "description": "Seaweed-derived, linked to gut inflammation in studies",
        "keywords": ["carrageenan", "e407"],
    },
    {
        "name": "Polysorbate 80",
        "type": "emulsifier",
        "risk_level": "medium",
        "description": "Synthetic emulsifier, may affect gut microbiome",
        "keywords": ["polysorbate 80", "e433"],
    },
    {
        "name": "Soy Lecithin",
        "type": "emulsifier",
        "risk_level": "low",
        "description": "Common emulsifier from soybeans, generally safe",
        "keywords": ["soy lecithin", "e322"],
    },

    # Stabilizers
    {
        "name": "Xanthan Gum",
        "type": "stabilizer",
        "risk_level": "low",
        "description": "Fermented sugar product, generally recognized as safe",
        "keywords": ["xanthan gum", "e415"],
    },
    {
        "name": "Guar Gum",
        "type": "stabilizer",
        "risk_level": "low",
        "description": "Natural thickener from guar beans",
        "keywords": ["guar gum", "e412"],
    },
)


# ==============================================================================
# CLEAN LABEL SCORE MARKERS
# ==============================================================================

# Known additive/artificial ingredient markers (-5 each)
NEGATIVE_MARKERS: List[str] = [
    "sodium benzoate", "potassium sorbate", "bht", "bha", "tbhq",
    "artificial", "modified", "hydrogenated", "high fructose",
    "monosodium glutamate", "msg", "tartrazine", "aspartame",
    "sucralose", "acesulfame", "red 40", "yellow 5", "yellow 6",
    "blue 1", "caramel color", "sodium nitrite", "sodium nitrate",
]

# Minimally processed / nutritive markers (+3 each)
POSITIVE_MARKERS: List[str] = [
    "organic", "whole", "vitamin", "mineral", "iron", "calcium",
    "fiber", "probiotic", "natural", "fresh", "unprocessed",
]

CLEAN_LABEL_BASE_SCORE = 70
CLEAN_LABEL_NEGATIVE_POINTS = 5
CLEAN_LABEL_POSITIVE_POINTS = 3
CLEAN_LABEL_SHORT_LIST_BONUS = 10
CLEAN_LABEL_LONG_LIST_PENALTY = 5
SHORT_LIST_MAX = 5
LONG_LIST_THRESHOLD = 15
VERY_LONG_LIST_THRESHOLD = 25

# Clean label score card labels, highest threshold first
CLEAN_LABEL_RATINGS: List[Tuple[int, str]] = [
    (80, "Excellent"),
    (65, "Good"),
    (50, "Fair"),
    (35, "Poor"),
]
CLEAN_LABEL_LOWEST_RATING = "Very Poor"


# ==============================================================================
# HEALTH RISK SCORING
# ==============================================================================

DEFAULT_SCORING_WEIGHTS: Dict[str, float] = {
    "preservative": 5,
    "color": 4,
    "flavor": 3,
    "sweetener": 4,
    "emulsifier": 2,
    "stabilizer": 1,
    "antioxidant": 3,
    "high_risk_multiplier": 2.0,
    "medium_risk_multiplier": 1.0,
    "long_list_penalty": 3,
    "whole_ingredient_bonus": 2,
}

# Penalty base for an additive type missing from the weights
FALLBACK_TYPE_WEIGHT = 2
LOW_RISK_MULTIPLIER = 0.5

# Long-list penalty: one band per 5 ingredients beyond 15, at most 3 bands
LONG_LIST_BAND_SIZE = 5
LONG_LIST_MAX_BANDS = 3

WHOLE_FOOD_MARKERS: List[str] = [
    "organic", "whole", "vitamin", "mineral", "iron", "calcium",
    "fiber", "probiotic", "natural", "fresh", "unprocessed",
    "olive oil", "coconut oil", "honey", "oat", "brown rice",
]

# Health risk tiers, highest threshold first
RISK_LEVEL_THRESHOLDS: List[Tuple[int, str]] = [
    (75, "low"),
    (50, "moderate"),
    (25, "high"),
]
LOWEST_RISK_LEVEL = "very-high"

IMPACT_BY_RISK_LEVEL: Dict[str, str] = {
    "high": "negative",
    "medium": "caution",
}
DEFAULT_IMPACT = "neutral"

TOP_INGREDIENTS_DEFAULT = 10
