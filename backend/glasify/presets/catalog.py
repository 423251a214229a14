"""
Catalog data for the Colombian market (prices in COP).

Shared building blocks for the presets.  Records are plain dicts: they are
raw seed input and only become typed once a factory validates them.
"""

# ==========================================
# PROFILE SUPPLIERS
# ==========================================

DECEUNINCK = {
    "name": "Deceuninck",
    "material_type": "PVC",
    "is_active": True,
    "notes": "Premium PVC profiles from Belgium. High thermal efficiency, multi-chamber system.",
}
REHAU = {
    "name": "Rehau",
    "material_type": "PVC",
    "is_active": True,
    "notes": "German PVC manufacturer. Excellent UV resistance for tropical climates.",
}
ALUMINA = {
    "name": "Alumina",
    "material_type": "ALUMINUM",
    "is_active": True,
    "notes": "Colombian aluminum manufacturer. Local production, competitive pricing.",
}
SISTEMAS_EUROPEOS = {
    "name": "Sistemas Europeos",
    "material_type": "ALUMINUM",
    "is_active": True,
    "notes": "High-end aluminum systems. Thermal break technology, commercial projects.",
}
MADERAS_DEL_NORTE = {
    "name": "Maderas del Norte",
    "material_type": "WOOD",
    "is_active": False,
    "notes": "Hardwood frames on request only.",
}

PROFILE_SUPPLIERS = [DECEUNINCK, REHAU, ALUMINA, SISTEMAS_EUROPEOS, MADERAS_DEL_NORTE]


# ==========================================
# GLASS SUPPLIERS
# ==========================================

def _glass_supplier(name, code, country, website, email, notes):
    return {
        "name": name,
        "code": code,
        "country": country,
        "website": website,
        "contact_email": email,
        "is_active": True,
        "notes": notes,
    }


AGC = _glass_supplier("AGC Glass Europe", "AGC", "Belgium", "https://www.agc-glass.eu",
                      "info@agc-glass.eu", "Global glass manufacturer with presence in Europe")
GUARDIAN = _glass_supplier("Guardian Glass", "GRD", "United States", "https://www.guardianglass.com",
                           "info@guardianglass.com", "Float glass and fabricated glass products")
PILKINGTON = _glass_supplier("Pilkington", "PLK", "United Kingdom", "https://www.pilkington.com",
                             "pilkington@nsg.com", "Float glass pioneer, part of NSG Group")
SAINT_GOBAIN = _glass_supplier("Saint-Gobain", "SGG", "France", "https://www.saint-gobain-glass.com",
                               "contact@saint-gobain-glass.com", "Glass manufacturing and distribution")
VITRO = _glass_supplier("Vitro Architectural Glass", "VIT", "Mexico", "https://www.vitroglazings.com",
                        "info@vitro.com", "Glass manufacturer for North and South America")

GLASS_SUPPLIERS = [AGC, GUARDIAN, PILKINGTON, SAINT_GOBAIN, VITRO]


# ==========================================
# GLASS TYPES
# ==========================================

def _glass(name, thickness, price, purpose, tempered=False, laminated=False, low_e=False,
           triple=False, u_value=None, code=None):
    record = {
        "name": name,
        "thickness_mm": thickness,
        "price_per_sqm": price,
        "purpose": purpose,
        "is_tempered": tempered,
        "is_laminated": laminated,
        "is_low_e": low_e,
        "is_triple_glazed": triple,
    }
    if u_value is not None:
        record["u_value"] = u_value
    if code is not None:
        record["code"] = code
    return record


GLASS_TYPES = [
    # Monolítico (float) - basic glass
    _glass("Vidrio Monolítico 4mm", 4, 28_000, "general", code="MONO4"),
    _glass("Vidrio Monolítico 6mm", 6, 35_000, "general", code="MONO6"),
    _glass("Vidrio Monolítico 8mm", 8, 45_000, "general", code="MONO8"),
    # Templado - safety glass
    _glass("Vidrio Templado 6mm", 6, 65_000, "security", tempered=True, code="TEMP6"),
    _glass("Vidrio Templado 8mm", 8, 85_000, "security", tempered=True, code="TEMP8"),
    _glass("Vidrio Templado 10mm", 10, 105_000, "security", tempered=True, code="TEMP10"),
    _glass("Vidrio Templado 12mm", 12, 130_000, "security", tempered=True, code="TEMP12"),
    # Laminado - retains fragments
    _glass("Vidrio Laminado 6mm (3+3)", 6, 95_000, "security", laminated=True, code="LAM6"),
    _glass("Vidrio Laminado 8mm (4+4)", 8, 115_000, "security", laminated=True, code="LAM8"),
    _glass("Vidrio Laminado 10mm (5+5)", 10, 135_000, "security", laminated=True, code="LAM10"),
    _glass("Vidrio Laminado Acústico 10mm", 10, 155_000, "insulation", laminated=True, code="LAMAC10"),
    # DVH (doble vidrio hermético)
    _glass("DVH 20mm (4-12-4)", 20, 120_000, "insulation", u_value=2.8, code="DVH20"),
    _glass("DVH 24mm (6-12-6)", 24, 145_000, "insulation", u_value=2.6, code="DVH24"),
    _glass("DVH 28mm (6-16-6)", 28, 165_000, "insulation", u_value=2.4, code="DVH28"),
    # Low-E
    _glass("DVH Low-E 24mm (6-12-6)", 24, 185_000, "insulation", low_e=True, u_value=1.8, code="LOWE24"),
    _glass("DVH Low-E 28mm (6-16-6)", 28, 210_000, "insulation", low_e=True, u_value=1.6, code="LOWE28"),
    _glass("TVH Low-E 36mm (4-12-4-12-4)", 36, 320_000, "insulation", low_e=True, triple=True,
           u_value=0.9, code="TVH36"),
    # Control solar
    _glass("Vidrio Reflectivo 6mm", 6, 75_000, "general", code="REFL6"),
    _glass("DVH Control Solar 24mm (6-12-6)", 24, 195_000, "insulation", u_value=2.2, code="DVHCS24"),
    # Decorativo
    _glass("Vidrio Esmerilado 6mm", 6, 55_000, "decorative", code="ESM6"),
    # Templado + laminado
    _glass("Vidrio Templado + Laminado 12mm (6+6)", 12, 180_000, "security", tempered=True,
           laminated=True, code="TEMPLAM12"),
]


def glass_types_named(*names):
    by_name = {g["name"]: g for g in GLASS_TYPES}
    return [by_name[n] for n in names]


# ==========================================
# MODELS
# ==========================================

def _model(name, supplier, base_price, cost_w, cost_h, accessory, discount, width, height,
           margin, notes=None):
    record = {
        "name": name,
        "profile_supplier_name": supplier,
        "base_price": base_price,
        "cost_per_mm_width": cost_w,
        "cost_per_mm_height": cost_h,
        "accessory_price": accessory,
        "glass_discount_width_mm": discount,
        "glass_discount_height_mm": discount,
        "min_width_mm": width[0],
        "max_width_mm": width[1],
        "min_height_mm": height[0],
        "max_height_mm": height[1],
        "profit_margin_percentage": margin,
        "status": "published",
    }
    if notes:
        record["cost_notes"] = notes
    return record


MODELS = [
    # Deceuninck (PVC)
    _model("Deceuninck Inoutic S5500 - Corredera Premium", "Deceuninck", 450_000, 120, 95, 85_000, 50,
           (800, 3000), (600, 2400), 35,
           notes="Sistema corredera premium con perfiles multicámara. Compatible con cristales de 4-30mm."),
    _model("Deceuninck Zendow#neo S4100 - Corredera Estándar", "Deceuninck", 350_000, 95, 75, 65_000, 45,
           (700, 2500), (500, 2200), 32),
    _model("Deceuninck Elegant S8000 - Oscilobatiente Premium", "Deceuninck", 520_000, 140, 115, 120_000, 40,
           (500, 1400), (600, 2000), 38),
    _model("Deceuninck Elegant - Batiente Estándar", "Deceuninck", 380_000, 105, 85, 75_000, 35,
           (400, 1200), (500, 1800), 33),
    # Alumina (aluminio)
    _model("Alumina Koncept 100 - Puerta Corredera Premium", "Alumina", 650_000, 155, 125, 150_000, 55,
           (1000, 3500), (800, 2600), 40),
    _model("Alumina Koncept 70 - Puerta y Ventana Corredera", "Alumina", 480_000, 115, 90, 95_000, 45,
           (800, 3000), (600, 2200), 36),
    _model("Alumina Koncept 50 - Ventana Corredera", "Alumina", 320_000, 85, 65, 55_000, 35,
           (600, 2400), (400, 1800), 30),
    _model("Alumina Koncept 40 - Oscilobatiente", "Alumina", 580_000, 145, 120, 135_000, 40,
           (500, 1300), (600, 1900), 37),
    _model("Alumina Superior 80 - Puerta/Ventana Corredera", "Alumina", 420_000, 105, 85, 80_000, 42,
           (700, 2800), (500, 2100), 34),
    _model("Alumina Superior 50 - Ventana Corredera", "Alumina", 280_000, 75, 60, 45_000, 30,
           (600, 2200), (400, 1600), 28),
]


def models_named(*names):
    by_name = {m["name"]: m for m in MODELS}
    return [by_name[n] for n in names]


# ==========================================
# SERVICES
# ==========================================

def _service(name, rate, type_):
    unit = {"area": "sqm", "perimeter": "ml", "fixed": "unit"}[type_]
    return {"name": name, "rate": rate, "type": type_, "unit": unit}


SERVICES = [
    # Instalación
    _service("Instalación Estándar de Ventana/Puerta", 45_000, "area"),
    _service("Instalación Premium con Impermeabilización", 75_000, "area"),
    _service("Instalación en Altura (Andamio/Plataforma)", 95_000, "area"),
    # Sellado
    _service("Sellado Perimetral con Silicona Estructural", 8_500, "perimeter"),
    _service("Sistema de Impermeabilización Avanzada", 35_000, "area"),
    # Acabados
    _service("Anodizado de Perfiles de Aluminio", 28_000, "area"),
    _service("Pintura Electrostática (Powder Coating)", 32_000, "area"),
    _service("Barnizado/Tinte para Perfiles de Madera", 42_000, "area"),
    # Películas
    _service("Película de Seguridad Anti-Impacto", 55_000, "area"),
    _service("Película de Control Solar/UV", 48_000, "area"),
    _service("Película de Privacidad (Esmerilado/Decorativo)", 38_000, "area"),
    # Accesorios
    _service("Mosquitero en Fibra de Vidrio", 85_000, "fixed"),
    _service("Reja de Seguridad Exterior", 180_000, "fixed"),
    _service("Sistema de Motorización Automática", 650_000, "fixed"),
    # Obra
    _service("Retiro de Ventana/Puerta Antigua", 55_000, "fixed"),
    _service("Ampliación/Reducción de Vano", 120_000, "perimeter"),
    # Mantenimiento
    _service("Ajuste y Mantenimiento de Herrajes", 35_000, "fixed"),
    _service("Reemplazo de Vidrio (Labor)", 42_000, "area"),
    _service("Reemplazo de Sellos de Goma (EPDM)", 6_500, "perimeter"),
]


def services_named(*names):
    by_name = {s["name"]: s for s in SERVICES}
    return [by_name[n] for n in names]


# ==========================================
# GLASS SOLUTIONS
# ==========================================

SECURITY = {
    "key": "security",
    "name": "Security",
    "name_es": "Seguridad",
    "description": "Protección contra impactos, rotura y acceso no autorizado",
    "icon": "Shield",
    "sort_order": 1,
}
THERMAL_INSULATION = {
    "key": "thermal_insulation",
    "name": "Thermal Insulation",
    "name_es": "Aislamiento Térmico",
    "description": "Reducción de pérdida de calor y mejora de eficiencia térmica",
    "icon": "Snowflake",
    "sort_order": 2,
}
SOUND_INSULATION = {
    "key": "sound_insulation",
    "name": "Sound Insulation",
    "name_es": "Insonorización",
    "description": "Reducción de ruido exterior para mayor confort acústico",
    "icon": "Volume2",
    "sort_order": 3,
}
ENERGY_EFFICIENCY = {
    "key": "energy_efficiency",
    "name": "Energy Efficiency",
    "name_es": "Eficiencia Energética",
    "description": "Ahorro energético mediante tecnología Low-E y doble/triple acristalamiento",
    "icon": "Zap",
    "sort_order": 4,
}
DECORATIVE = {
    "key": "decorative",
    "name": "Decorative",
    "name_es": "Decorativo",
    "description": "Estética, privacidad y elementos decorativos",
    "icon": "Sparkles",
    "sort_order": 5,
}
GENERAL = {
    "key": "general",
    "name": "General Purpose",
    "name_es": "Uso General",
    "description": "Solución estándar para uso general",
    "icon": "Home",
    "sort_order": 6,
}

GLASS_SOLUTIONS = [SECURITY, THERMAL_INSULATION, SOUND_INSULATION, ENERGY_EFFICIENCY, DECORATIVE, GENERAL]
