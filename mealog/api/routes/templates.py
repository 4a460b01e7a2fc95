from fastapi import APIRouter, Depends

from mealog.api.deps import get_template_repository
from mealog.infra.Template_Repository import TemplateRepository
from mealog.utilities.validators import TemplateInput

router = APIRouter(prefix="/api/templates")


@router.get("")
def list_templates(repo: TemplateRepository = Depends(get_template_repository)):
    return repo.load().to_dict()


@router.post("", status_code=201)
def add_template(payload: TemplateInput, repo: TemplateRepository = Depends(get_template_repository)):
    repo.upsert(payload.name, payload.description)
    return {"success": True, "template": {"name": payload.name, "description": payload.description}}
