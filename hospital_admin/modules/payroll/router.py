from hospital_admin.api.routing import Request, RouteGroup
from hospital_admin.core.errors import parse_payload
from hospital_admin.store.store import ResourceStore
from hospital_admin.modules.payroll.schemas import SalaryStructureIn
from hospital_admin.modules.payroll.service import SalaryService

router = RouteGroup("/hospitals/{hospital_id}/staff/{staff_id}/salary-structure")

@router.get("")
async def get_salary_structure(req: Request, store: ResourceStore):
    return await SalaryService(store).get(req.params["staff_id"])

@router.update("")
async def save_salary_structure(req: Request, store: ResourceStore):
    return await SalaryService(store).save(req.params["staff_id"], parse_payload(SalaryStructureIn, req.body))
