"""Static reference data: the vehicle catalog and spelling-variant tables.

The catalog is Malaysia-centric. Brand and model names here are the
canonical spellings every matcher resolves to.
"""

# =============================================================================
# Vehicle catalog (canonical brand -> ordered canonical models)
# =============================================================================

VEHICLE_CATALOG: dict[str, list[str]] = {
    "Perodua": ["Axia", "Bezza", "Myvi", "Aruz", "Alza", "Ativa"],
    "Proton": [
        "Saga", "Persona", "Iriz", "X50", "X70", "X90",
        "Exora", "Wira", "Waja", "Perdana",
    ],
    "Toyota": ["Vios", "Yaris", "Corolla Altis", "Camry", "Hilux", "Avanza"],
    "Honda": ["City", "Civic", "HR-V", "CR-V", "Accord", "Jazz"],
    "Nissan": ["Almera", "X-Trail", "Serena"],
    "Mazda": ["Mazda 2", "Mazda 3", "CX-3", "CX-5", "CX-8"],
    "Mercedes-Benz": ["A 200", "C 200", "E 300", "E 63", "GLC 300"],
    "BMW": ["320i", "330i", "520i", "X1", "X3"],
    "Hyundai": ["Elantra", "Tucson", "Santa Fe", "Kona"],
    "Kia": ["Cerato", "Picanto", "Sportage", "Sorento"],
    "Volkswagen": ["Polo", "Jetta", "Golf", "Passat"],
}

# =============================================================================
# Spelling variants
# =============================================================================

# Keyed by normalize_key() form: lowercase, no spaces or hyphens
MAKE_SYNONYMS: dict[str, str] = {
    "perodua": "Perodua",
    "peroduo": "Perodua",
    "proton": "Proton",
    "toyyota": "Toyota",
    "toyota": "Toyota",
    "honda": "Honda",
    "nissan": "Nissan",
    "mazda": "Mazda",
    "merc": "Mercedes-Benz",
    "mercedes": "Mercedes-Benz",
    "mercedesbenz": "Mercedes-Benz",
    "bmw": "BMW",
    "hyundai": "Hyundai",
    "kia": "Kia",
    "vw": "Volkswagen",
    "volkswagen": "Volkswagen",
}

# Keyed by lowercased, trimmed text: inner spaces and hyphens are significant
MODEL_SYNONYMS: dict[str, str] = {
    "myvee": "Myvi",
    "myvy": "Myvi",
    "beza": "Bezza",
    "alzza": "Alza",
    "segar": "Saga",
    "personna": "Persona",
    "x7o": "X70",
    "vious": "Vios",
    "altis": "Corolla Altis",
    "e300 amg": "E 300",
    "e300": "E 300",
    "e63": "E 63",
    "civc": "Civic",
    "hrv": "HR-V",
    "crv": "CR-V",
}

# Demo inputs covering a typo'd brand, a low-scoring model typo, a short
# plate and a model only reachable through a synonym. The 2026 year is
# flagged as future-dated on any run before 2026.
EXAMPLE_SETS: list[dict[str, str]] = [
    {"plate": "wvy1234", "make": "perdua", "model": "myvee", "year": "2019", "variant": "1.5 AV"},
    {"plate": "bml3301", "make": "bmw", "model": "330l", "year": "2026", "variant": "M Sport"},
    {"plate": "qtr-88", "make": "toyyota", "model": "vious", "year": "2014", "variant": "TRD"},
    {"plate": "jpb 7", "make": "merc", "model": "e300 amg", "year": "2021", "variant": "AMG Line"},
]


def all_models() -> list[str]:
    """Every catalog model, flattened in catalog order."""
    return [model for models in VEHICLE_CATALOG.values() for model in models]


def models_for_make(make: str) -> list[str]:
    return VEHICLE_CATALOG.get(make, [])
