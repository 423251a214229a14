"""
Demo-client preset: a realistic showroom setup for sales demos.

4 suppliers, 10 glass types, 6 models, 10 services, all 6 solutions and a
curated glass type to solution mapping instead of automatic classification.
"""
from glasify.presets import Preset
from glasify.presets import catalog
from glasify.presets.catalog import ALUMINA, DECEUNINCK, REHAU, SISTEMAS_EUROPEOS

GLASS_TYPES = catalog.glass_types_named(
    "Vidrio Monolítico 4mm",
    "Vidrio Monolítico 6mm",
    "Vidrio Templado 6mm",
    "Vidrio Templado 10mm",
    "Vidrio Laminado 6mm (3+3)",
    "Vidrio Templado + Laminado 12mm (6+6)",
    "DVH 20mm (4-12-4)",
    "DVH 24mm (6-12-6)",
    "DVH Low-E 24mm (6-12-6)",
    "DVH Low-E 28mm (6-16-6)",
)

MODELS = catalog.models_named(
    "Deceuninck Inoutic S5500 - Corredera Premium",
    "Deceuninck Zendow#neo S4100 - Corredera Estándar",
    "Deceuninck Elegant - Batiente Estándar",
    "Alumina Koncept 70 - Puerta y Ventana Corredera",
    "Alumina Koncept 50 - Ventana Corredera",
    "Alumina Superior 50 - Ventana Corredera",
)

SERVICES = catalog.services_named(
    "Instalación Estándar de Ventana/Puerta",
    "Instalación Premium con Impermeabilización",
    "Sellado Perimetral con Silicona Estructural",
    "Sistema de Impermeabilización Avanzada",
    "Anodizado de Perfiles de Aluminio",
    "Película de Seguridad Anti-Impacto",
    "Mosquitero en Fibra de Vidrio",
    "Retiro de Ventana/Puerta Antigua",
    "Ajuste y Mantenimiento de Herrajes",
    "Reemplazo de Vidrio (Labor)",
)


def _m(glass, solution, rating, primary=False):
    return {
        "glass_type_name": glass,
        "solution_key": solution,
        "performance_rating": rating,
        "is_primary": primary,
    }


MAPPINGS = [
    _m("Vidrio Monolítico 4mm", "general", "standard", True),
    _m("Vidrio Monolítico 6mm", "general", "standard", True),
    _m("Vidrio Monolítico 6mm", "sound_insulation", "basic"),
    _m("Vidrio Templado 6mm", "security", "good", True),
    _m("Vidrio Templado 10mm", "security", "very_good", True),
    _m("Vidrio Templado 10mm", "sound_insulation", "good"),
    _m("Vidrio Laminado 6mm (3+3)", "security", "very_good", True),
    _m("Vidrio Laminado 6mm (3+3)", "sound_insulation", "very_good"),
    _m("Vidrio Templado + Laminado 12mm (6+6)", "security", "excellent", True),
    _m("Vidrio Templado + Laminado 12mm (6+6)", "sound_insulation", "excellent"),
    _m("DVH 20mm (4-12-4)", "thermal_insulation", "good", True),
    _m("DVH 20mm (4-12-4)", "sound_insulation", "good"),
    _m("DVH 24mm (6-12-6)", "thermal_insulation", "good", True),
    _m("DVH 24mm (6-12-6)", "sound_insulation", "good"),
    _m("DVH Low-E 24mm (6-12-6)", "thermal_insulation", "excellent", True),
    _m("DVH Low-E 24mm (6-12-6)", "energy_efficiency", "very_good"),
    _m("DVH Low-E 28mm (6-16-6)", "thermal_insulation", "excellent", True),
    _m("DVH Low-E 28mm (6-16-6)", "energy_efficiency", "very_good"),
]

PRESET = Preset(
    name="demo-client",
    description="Configuración de demostración para presentaciones a clientes",
    profile_suppliers=[DECEUNINCK, REHAU, ALUMINA, SISTEMAS_EUROPEOS],
    glass_types=GLASS_TYPES,
    models=MODELS,
    services=SERVICES,
    glass_solutions=list(catalog.GLASS_SOLUTIONS),
    glass_type_solution_mappings=MAPPINGS,
)
