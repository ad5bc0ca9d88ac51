"""
Static reference data: roadmap phase templates, grade scales and majors.

The catalog is read from ``catalog.yaml`` once per process and handed to the
services that need it, so checklist seeding and profile validation never reach
for module-level literals.
"""
from dataclasses import dataclass
from functools import lru_cache
from pathlib import Path
from typing import Optional

import yaml

CATALOG_PATH = Path(__file__).resolve().parent / "catalog.yaml"


@dataclass(frozen=True)
class PhaseTemplate:
    """A roadmap phase and its default checklist."""
    id: str
    title: str
    description: str
    checklist: tuple[str, ...]


@dataclass(frozen=True)
class Catalog:
    """Immutable reference data shared by all requests."""
    phases: tuple[PhaseTemplate, ...]
    kcse_grades: tuple[str, ...]
    alevel_grades: tuple[str, ...]
    majors: tuple[str, ...]

    @property
    def phase_ids(self) -> tuple[str, ...]:
        return tuple(p.id for p in self.phases)

    def get_phase(self, phase_id: str) -> Optional[PhaseTemplate]:
        for phase in self.phases:
            if phase.id == phase_id:
                return phase
        return None


def load_catalog(path: Path = CATALOG_PATH) -> Catalog:
    """
    Load the catalog from a YAML file.

    Raises:
        FileNotFoundError: If the file doesn't exist
        ValueError: If a required section is missing or malformed
    """
    with open(path, "r", encoding="utf-8") as f:
        data = yaml.safe_load(f)

    if not data:
        raise ValueError(f"Catalog file is empty: {path}")

    for key in ("phases", "kcse_grades", "alevel_grades", "majors"):
        if key not in data:
            raise ValueError(f"Invalid catalog file: missing '{key}' section")

    phases = []
    for item in data["phases"]:
        if "id" not in item or not item.get("checklist"):
            raise ValueError(f"Phase entry needs an id and a checklist: {item}")
        phases.append(PhaseTemplate(
            id=item["id"],
            title=item.get("title", item["id"]),
            description=item.get("description", ""),
            checklist=tuple(str(entry) for entry in item["checklist"]),
        ))

    return Catalog(
        phases=tuple(phases),
        kcse_grades=tuple(data["kcse_grades"]),
        alevel_grades=tuple(data["alevel_grades"]),
        majors=tuple(data["majors"]),
    )


@lru_cache
def get_catalog() -> Catalog:
    """Get the process-wide catalog instance."""
    return load_catalog()
