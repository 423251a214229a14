"""
Minimal preset: quick testing and CI pipelines.

3 glass types (simple, tempered, DVH), 2 suppliers (PVC and aluminum),
2 window models, 3 core services, 3 solutions (security, thermal, general).
Glass types carry no price, so the seeding fallback price applies.
"""
from glasify.presets import Preset
from glasify.presets.catalog import ALUMINA, DECEUNINCK, GENERAL, SECURITY, THERMAL_INSULATION

GLASS_TYPES = [
    {"code": "MIN_SIMPLE4", "name": "Vidrio Simple 4mm", "thickness_mm": 4},
    {"code": "MIN_TEMP6", "name": "Vidrio Templado 6mm", "thickness_mm": 6,
     "is_tempered": True, "purpose": "security"},
    {"code": "MIN_DVH24", "name": "DVH 24mm (6-12-6)", "thickness_mm": 24, "u_value": 2.8,
     "purpose": "insulation"},
]

MODELS = [
    {
        "name": "Ventana Corredera Estándar",
        "profile_supplier_name": "Deceuninck",
        "accessory_price": 65_000,
        "base_price": 350_000,
        "cost_per_mm_height": 75,
        "cost_per_mm_width": 95,
        "glass_discount_height_mm": 45,
        "glass_discount_width_mm": 45,
        "max_height_mm": 2200,
        "max_width_mm": 2500,
        "min_height_mm": 500,
        "min_width_mm": 700,
        "profit_margin_percentage": 30,
        "status": "published",
    },
    {
        "name": "Ventana Corredera Aluminio",
        "profile_supplier_name": "Alumina",
        "accessory_price": 55_000,
        "base_price": 280_000,
        "cost_per_mm_height": 65,
        "cost_per_mm_width": 85,
        "glass_discount_height_mm": 35,
        "glass_discount_width_mm": 35,
        "max_height_mm": 1800,
        "max_width_mm": 2400,
        "min_height_mm": 400,
        "min_width_mm": 600,
        "profit_margin_percentage": 28,
        "status": "published",
    },
]

SERVICES = [
    {"name": "Instalación Estándar", "rate": 45_000, "type": "area", "unit": "sqm"},
    {"name": "Sellado Perimetral", "rate": 8_500, "type": "perimeter", "unit": "ml"},
    {"name": "Retiro de Ventana Antigua", "rate": 55_000, "type": "fixed", "unit": "unit"},
]

PRESET = Preset(
    name="minimal",
    description="Configuración mínima para pruebas rápidas y CI/CD",
    profile_suppliers=[DECEUNINCK, ALUMINA],
    glass_types=GLASS_TYPES,
    models=MODELS,
    services=SERVICES,
    glass_solutions=[SECURITY, THERMAL_INSULATION, GENERAL],
)
