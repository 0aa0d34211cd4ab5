import copy
import logging
from hospital_admin.core.config import Settings
from hospital_admin.core.errors import InvalidInput
from hospital_admin.store.store import ResourceStore
from hospital_admin.modules.aggregation.payroll import active_taxes, net_salary, payroll_row, salary_key
from hospital_admin.modules.payroll.schemas import SalaryStructureIn, DEFAULT_TAX_TYPES

log = logging.getLogger(__name__)

def validate_tax_policy(taxes: list[dict], settings: Settings) -> None:
    """Active taxes (percentage > 0) must be within the configured count and range."""
    active = active_taxes(taxes)
    lo, hi = settings.TAX_MIN_PERCENT, settings.TAX_MAX_PERCENT
    for t in active:
        if not lo <= t["percentage"] <= hi:
            raise InvalidInput(f"{t['name']} percentage must be between {lo:g}% and {hi:g}%")
    if len(active) < settings.TAX_MIN_ACTIVE:
        raise InvalidInput(f"At least {settings.TAX_MIN_ACTIVE} taxes must be active")
    if len(active) > settings.TAX_MAX_ACTIVE:
        raise InvalidInput(f"At most {settings.TAX_MAX_ACTIVE} taxes may be active")

class SalaryService:
    def __init__(self, store: ResourceStore):
        self.store = store

    async def get(self, staff_id) -> dict:
        await self.store.delay(300)
        staff = self.store.clinicians.get(staff_id)
        stored = await self.store.overlay.read(salary_key(staff["id"]))
        if stored:
            return stored
        # unsaved: show the payroll figure with every tax off
        roster = self.store.clinicians.all()
        index = next(i for i, s in enumerate(roster) if s["id"] == staff["id"])
        base = payroll_row(staff, index, self.store.today())["salary"]
        return {
            "employeeId": staff["id"],
            "employeeName": staff["name"],
            "baseSalary": base,
            "taxTypes": copy.deepcopy(DEFAULT_TAX_TYPES),
            "netSalary": base,
            "updatedAt": None,
        }

    async def save(self, staff_id, payload: SalaryStructureIn) -> dict:
        await self.store.delay(500)
        staff = self.store.clinicians.get(staff_id)
        taxes = [t.model_dump() for t in payload.taxTypes]
        validate_tax_policy(taxes, self.store.settings)
        structure = {
            "employeeId": staff["id"],
            "employeeName": staff["name"],
            "baseSalary": payload.baseSalary,
            "taxTypes": taxes,
            "netSalary": net_salary(payload.baseSalary, taxes),
            "updatedAt": self.store.now_iso(),
        }
        await self.store.overlay.write(salary_key(staff["id"]), structure)
        log.info(f"Salary structure saved for staff {staff['id']} net={structure['netSalary']}")
        return {"ok": True, "salaryStructure": structure}
