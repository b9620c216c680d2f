"""ProjectCosts - the applicant's cost breakdown, grouped by category.

Field names are snake_case; the intake form posts camelCase keys, which are
accepted through the alias generator.
"""

from dataclasses import dataclass
from typing import Iterator, Optional

from pydantic import BaseModel, Field
from pydantic.alias_generators import to_camel


_COST_MODEL_CONFIG = {
    "frozen": True,
    "alias_generator": to_camel,
    "populate_by_name": True,
}


class CostItem(BaseModel):
    """A single named cost line."""

    amount: float = Field(default=0.0, description="Amount in EUR")
    description: Optional[str] = Field(default=None, description="Free-text note from the applicant")

    model_config = _COST_MODEL_CONFIG

    @property
    def counted_amount(self) -> float:
        """Amount as it contributes to totals; negative input counts as zero."""
        return self.amount if self.amount > 0 else 0.0


class PremisesCosts(BaseModel):
    land_and_building: CostItem = Field(default_factory=CostItem)
    lease_and_rental: CostItem = Field(default_factory=CostItem)
    construction: CostItem = Field(default_factory=CostItem)

    model_config = _COST_MODEL_CONFIG


class EquipmentCosts(BaseModel):
    equipment_machinery: CostItem = Field(default_factory=CostItem)
    furniture_fixtures: CostItem = Field(default_factory=CostItem)

    model_config = _COST_MODEL_CONFIG


class WagesCosts(BaseModel):
    wage_cost: CostItem = Field(default_factory=CostItem)
    relocation_employees: CostItem = Field(default_factory=CostItem)

    model_config = _COST_MODEL_CONFIG


class DigitalCosts(BaseModel):
    hardware_software: CostItem = Field(default_factory=CostItem)
    digital_tools: CostItem = Field(default_factory=CostItem)

    model_config = _COST_MODEL_CONFIG


class VehicleCosts(BaseModel):
    vehicles: CostItem = Field(default_factory=CostItem)

    model_config = _COST_MODEL_CONFIG


class InnovationCosts(BaseModel):
    specialised_services: CostItem = Field(default_factory=CostItem)
    innovative_wages: CostItem = Field(default_factory=CostItem)
    professional_fees: CostItem = Field(default_factory=CostItem)
    rd_expertise: CostItem = Field(default_factory=CostItem)
    business_travel: CostItem = Field(default_factory=CostItem)
    ip_protection: CostItem = Field(default_factory=CostItem)
    marketing: CostItem = Field(default_factory=CostItem)
    certification: CostItem = Field(default_factory=CostItem)

    model_config = _COST_MODEL_CONFIG


@dataclass(frozen=True)
class CostLine:
    """Static description of one cost line.

    Attributes:
        category: Attribute name of the category on ProjectCosts.
        field: Attribute name of the line within its category.
        eligible_key: Key used in a scheme's eligible-costs map.
        label: Display label.
        is_capex: True for one-off capital expenditure, False for OPEX.
    """

    category: str
    field: str
    eligible_key: str
    label: str
    is_capex: bool


# Fixed category-then-field order; apportionment walks this table.
COST_LINES: tuple[CostLine, ...] = (
    CostLine("premises", "land_and_building", "premises_land_building", "Land & Building", True),
    CostLine("premises", "lease_and_rental", "premises_lease_rental", "Lease & Rental", False),
    CostLine("premises", "construction", "premises_construction", "Construction", True),
    CostLine("equipment", "equipment_machinery", "equipment_machinery", "Equipment & Machinery", True),
    CostLine("equipment", "furniture_fixtures", "equipment_furniture", "Furniture & Fixtures", True),
    CostLine("wages", "wage_cost", "wages_cost", "Wage Costs", False),
    CostLine("wages", "relocation_employees", "wages_relocation", "Employee Relocation", True),
    CostLine("digital", "hardware_software", "digital_hardware_software", "Hardware & Software", True),
    CostLine("digital", "digital_tools", "digital_tools", "Digital Tools", True),
    CostLine("vehicles", "vehicles", "vehicles", "Vehicles", True),
    CostLine("innovation", "specialised_services", "innovation_specialised_services", "Specialised Services", False),
    CostLine("innovation", "innovative_wages", "innovation_wages", "Innovation Wages", False),
    CostLine("innovation", "professional_fees", "innovation_professional_fees", "Professional Fees", False),
    CostLine("innovation", "rd_expertise", "innovation_rd_expertise", "R&D Expertise", False),
    CostLine("innovation", "business_travel", "innovation_business_travel", "Business Travel", False),
    CostLine("innovation", "ip_protection", "innovation_ip_protection", "IP Protection", True),
    CostLine("innovation", "marketing", "innovation_marketing", "Marketing", False),
    CostLine("innovation", "certification", "innovation_certification", "Certification", False),
)

ELIGIBLE_COST_KEYS: frozenset[str] = frozenset(line.eligible_key for line in COST_LINES)

CATEGORY_LABELS: dict[str, str] = {
    "premises": "Premises",
    "equipment": "Equipment",
    "wages": "Wages & Staff",
    "digital": "Digital & Technology",
    "vehicles": "Vehicles",
    "innovation": "Innovation & Advisory",
}


class ProjectCosts(BaseModel):
    """Complete project cost breakdown across the six fixed categories."""

    premises: PremisesCosts = Field(default_factory=PremisesCosts)
    equipment: EquipmentCosts = Field(default_factory=EquipmentCosts)
    wages: WagesCosts = Field(default_factory=WagesCosts)
    digital: DigitalCosts = Field(default_factory=DigitalCosts)
    vehicles: VehicleCosts = Field(default_factory=VehicleCosts)
    innovation: InnovationCosts = Field(default_factory=InnovationCosts)

    model_config = _COST_MODEL_CONFIG

    def item(self, line: CostLine) -> CostItem:
        return getattr(getattr(self, line.category), line.field)

    def iter_lines(self) -> Iterator[tuple[CostLine, CostItem]]:
        """Yield (line, item) pairs in the fixed category-then-field order."""
        for line in COST_LINES:
            yield line, self.item(line)

    @property
    def total_capex(self) -> float:
        return sum(item.counted_amount for line, item in self.iter_lines() if line.is_capex)

    @property
    def total_opex(self) -> float:
        return sum(item.counted_amount for line, item in self.iter_lines() if not line.is_capex)

    @property
    def total_project_cost(self) -> float:
        return self.total_capex + self.total_opex

    def categories_with_costs(self) -> list[str]:
        """Category keys holding at least one positive cost line, in fixed order."""
        seen: list[str] = []
        for line, item in self.iter_lines():
            if item.counted_amount > 0 and line.category not in seen:
                seen.append(line.category)
        return seen
