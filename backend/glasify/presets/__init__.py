"""
Preset registry.

A preset is a named, fixed bundle of raw seed data for one deployment
scenario.  Preset modules are imported on first use.
"""
import importlib
import logging
from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional

from glasify.services.exceptions import UnknownPresetError

logger = logging.getLogger("glasify-presets")

Record = Dict[str, Any]

# preset name -> module exposing PRESET
_REGISTRY = {
    "minimal": "glasify.presets.minimal",
    "demo-client": "glasify.presets.demo_client",
    "full-catalog": "glasify.presets.full_catalog",
}

DEFAULT_PRESET = "minimal"


@dataclass
class Preset:
    name: str
    description: str
    profile_suppliers: List[Record] = field(default_factory=list)
    # optional; glass types resolve their supplier by code prefix
    glass_suppliers: List[Record] = field(default_factory=list)
    glass_types: List[Record] = field(default_factory=list)
    models: List[Record] = field(default_factory=list)
    services: List[Record] = field(default_factory=list)
    glass_solutions: List[Record] = field(default_factory=list)
    # None -> classify every seeded glass type
    glass_type_solution_mappings: Optional[List[Record]] = None

    def stats(self) -> Dict[str, int]:
        counts = {
            "profile_suppliers": len(self.profile_suppliers),
            "glass_suppliers": len(self.glass_suppliers),
            "glass_types": len(self.glass_types),
            "models": len(self.models),
            "services": len(self.services),
            "glass_solutions": len(self.glass_solutions),
            "glass_type_solution_mappings": len(self.glass_type_solution_mappings or []),
        }
        counts["total"] = sum(counts.values())
        return counts


def list_presets() -> List[str]:
    return list(_REGISTRY)


def get_preset(name: str) -> Preset:
    module_path = _REGISTRY.get(name)
    if module_path is None:
        raise UnknownPresetError(name, list_presets())
    preset = importlib.import_module(module_path).PRESET
    logger.debug("Loaded preset %s: %s", name, preset.stats())
    return preset
