"""Full-catalog preset: every catalog entry, solutions assigned by classification."""
from glasify.presets import Preset
from glasify.presets import catalog

PRESET = Preset(
    name="full-catalog",
    description="Catálogo completo del mercado colombiano",
    profile_suppliers=list(catalog.PROFILE_SUPPLIERS),
    glass_suppliers=list(catalog.GLASS_SUPPLIERS),
    glass_types=list(catalog.GLASS_TYPES),
    models=list(catalog.MODELS),
    services=list(catalog.SERVICES),
    glass_solutions=list(catalog.GLASS_SOLUTIONS),
)
