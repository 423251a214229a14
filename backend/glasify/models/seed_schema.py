"""
Seed input schemas.

These are the typed records the factories produce and the seeders persist.
Field constraints here are the schema layer; cross-field business rules live
in services/factories.py.
"""
from typing import List, Literal, Optional

from pydantic import BaseModel, Field

MaterialType = Literal["PVC", "ALUMINUM", "WOOD", "MIXED"]
GlassPurpose = Literal["general", "insulation", "security", "decorative"]
ModelStatus = Literal["draft", "published"]
ServiceType = Literal["area", "perimeter", "fixed"]
ServiceUnit = Literal["unit", "sqm", "ml"]
PerformanceRating = Literal["basic", "standard", "good", "very_good", "excellent"]

PERFORMANCE_RATINGS: tuple = ("basic", "standard", "good", "very_good", "excellent")


class ProfileSupplierInput(BaseModel):
    """Manufacturer of window/door frame profiles. Natural key: name."""
    name: str = Field(..., min_length=2, max_length=100, pattern=r"^[\w\s&().-]+$",
                      description="e.g., Deceuninck, Alumina")
    material_type: MaterialType = Field(..., description="Frame material family")
    is_active: bool = Field(True, description="Inactive suppliers are hidden from the catalog")
    notes: Optional[str] = Field(None, max_length=500)


class GlassSupplierInput(BaseModel):
    """Glass manufacturer. Natural key: name; code is the prefix of its glass codes."""
    name: str = Field(..., min_length=2, max_length=100, description="e.g., Guardian, Saint-Gobain")
    code: Optional[str] = Field(None, min_length=1, max_length=10, description="e.g., GRD")
    country: Optional[str] = Field(None, max_length=100)
    website: Optional[str] = Field(None, max_length=255, pattern=r"^https?://\S+$")
    contact_email: Optional[str] = Field(None, max_length=255, pattern=r"^[^@\s]+@[^@\s]+\.[^@\s]+$")
    contact_phone: Optional[str] = Field(None, max_length=50)
    is_active: bool = True
    notes: Optional[str] = Field(None, max_length=500)


class GlassTypeInput(BaseModel):
    """Catalog glass product. Natural key: name."""
    name: str = Field(..., min_length=3, max_length=100, description="e.g., Vidrio Templado 6mm")
    code: Optional[str] = Field(None, min_length=1, max_length=50, description="Supplier SKU, e.g., MIN_TEMP6")
    glass_supplier_code: Optional[str] = Field(
        None, min_length=1, max_length=10,
        description="Resolved to a GlassSupplier id at seed time; defaults to matching the code prefix",
    )
    thickness_mm: int = Field(..., ge=3, le=50, description="Total thickness in mm")
    price_per_sqm: float = Field(..., gt=0, description="COP per square meter")
    purpose: GlassPurpose = Field("general", description="Declared primary use")
    is_tempered: bool = False
    is_laminated: bool = False
    is_low_e: bool = False
    is_triple_glazed: bool = False
    u_value: Optional[float] = Field(None, gt=0, description="Thermal transmittance, W/m²·K")
    solar_factor: Optional[float] = Field(None, ge=0, le=1, description="g-value, 0-1")
    light_transmission: Optional[float] = Field(None, ge=0, le=1, description="Visible light transmission, 0-1")
    manufacturer: Optional[str] = Field(None, max_length=100)
    series: Optional[str] = Field(None, max_length=100)
    description: Optional[str] = Field(None, max_length=500)


class ModelInput(BaseModel):
    """Purchasable window/door product. Natural key: name."""
    name: str = Field(..., min_length=3, max_length=150)
    profile_supplier_name: str = Field(..., min_length=1, description="Resolved to a ProfileSupplier id at seed time")
    min_width_mm: int = Field(..., ge=100, le=10_000)
    max_width_mm: int = Field(..., ge=100, le=10_000)
    min_height_mm: int = Field(..., ge=100, le=10_000)
    max_height_mm: int = Field(..., ge=100, le=10_000)
    base_price: float = Field(..., gt=0)
    cost_per_mm_width: float = Field(..., ge=0)
    cost_per_mm_height: float = Field(..., ge=0)
    accessory_price: Optional[float] = Field(None, ge=0)
    glass_discount_width_mm: int = Field(0, ge=0, le=200)
    glass_discount_height_mm: int = Field(0, ge=0, le=200)
    profit_margin_percentage: Optional[float] = Field(None, ge=0, le=100)
    status: ModelStatus = "published"
    cost_notes: Optional[str] = Field(None, max_length=1000)
    compatible_glass_type_ids: List[str] = Field(default_factory=list,
                                                 description="Filled by the orchestrator from seeded glass types")


class ServiceInput(BaseModel):
    """Ancillary billable item. Natural key: name (checked by lookup, not a constraint)."""
    name: str = Field(..., min_length=3, max_length=100)
    type: ServiceType
    unit: ServiceUnit
    rate: float = Field(..., gt=0, description="COP per unit of billing")
    minimum_billing_unit: Optional[float] = Field(None, gt=0, description="Minimum billable quantity")


class GlassSolutionInput(BaseModel):
    """Use-case category. Natural key: key."""
    key: str = Field(..., min_length=3, max_length=50, pattern=r"^[a-z][a-z0-9_]*$")
    name: str = Field(..., min_length=3, max_length=100, description="English display name")
    name_es: str = Field(..., min_length=3, max_length=100, description="Spanish display name")
    description: str = Field(..., min_length=10, max_length=200)
    icon: str = Field(..., description="Lucide icon tag")
    sort_order: int = Field(..., ge=1, le=100)

    @property
    def slug(self) -> str:
        return self.key.replace("_", "-")


class GlassTypeSolutionInput(BaseModel):
    """Assignment row. Natural key: (glass_type_id, solution_id)."""
    glass_type_id: str = Field(..., min_length=1)
    solution_id: str = Field(..., min_length=1)
    performance_rating: PerformanceRating
    is_primary: bool = False
    notes: Optional[str] = Field(None, max_length=500)


class GlassTypeSolutionMapping(BaseModel):
    """Preset-level explicit assignment, by natural keys instead of ids."""
    glass_type_name: str = Field(..., min_length=1)
    solution_key: str = Field(..., min_length=1)
    performance_rating: PerformanceRating
    is_primary: bool = False
    notes: Optional[str] = None
