from collections import OrderedDict
from typing import List

from fastapi import APIRouter, Depends, status
from sqlalchemy.orm import Session

from grindlog.api.auth import AuthContext, get_current_user
from grindlog.database import get_db
from grindlog.errors import BadRequestError, NotFoundError
from grindlog.models.template import WorkoutTemplate
from grindlog.schemas.common import MessageResponse
from grindlog.schemas.template import TemplateCreate, TemplateResponse, TemplateUpdate, WeeklyTemplates

router = APIRouter(prefix="/api/templates", tags=["templates"])


def active_templates(db: Session):
    return db.query(WorkoutTemplate).filter(WorkoutTemplate.is_active.is_(True))


def get_template_or_404(db: Session, template_id: int) -> WorkoutTemplate:
    template = db.query(WorkoutTemplate).filter(WorkoutTemplate.id == template_id).first()
    if template is None:
        raise NotFoundError("Template not found")
    return template


@router.get("", response_model=List[TemplateResponse])
def list_templates(
    db: Session = Depends(get_db),
    current_user: AuthContext = Depends(get_current_user),
):
    return active_templates(db).order_by(WorkoutTemplate.day_of_week, WorkoutTemplate.order_index).all()


@router.get("/day/{day_of_week}", response_model=List[TemplateResponse])
def templates_for_day(
    day_of_week: str,
    db: Session = Depends(get_db),
    current_user: AuthContext = Depends(get_current_user),
):
    # Parsed by hand so a non-numeric day gets the same 400 as an out-of-range one
    try:
        day = int(day_of_week)
    except ValueError:
        raise BadRequestError("Invalid day of week (0-6)")
    if not 0 <= day <= 6:
        raise BadRequestError("Invalid day of week (0-6)")

    return (
        active_templates(db)
        .filter(WorkoutTemplate.day_of_week == day)
        .order_by(WorkoutTemplate.order_index)
        .all()
    )


@router.get("/weekly", response_model=WeeklyTemplates)
def weekly_templates(
    db: Session = Depends(get_db),
    current_user: AuthContext = Depends(get_current_user),
):
    """Templates grouped by weekday, with the display name of each day."""
    weekly_plan = OrderedDict()
    day_names = OrderedDict()
    for template in active_templates(db).order_by(WorkoutTemplate.day_of_week, WorkoutTemplate.order_index):
        if template.day_of_week not in weekly_plan:
            weekly_plan[template.day_of_week] = []
            day_names[template.day_of_week] = template.day_name
        weekly_plan[template.day_of_week].append(template)
    return {"weekly_plan": weekly_plan, "day_names": day_names}


@router.post("", response_model=TemplateResponse, status_code=status.HTTP_201_CREATED)
def create_template(
    request: TemplateCreate,
    db: Session = Depends(get_db),
    current_user: AuthContext = Depends(get_current_user),
):
    template = WorkoutTemplate(**request.model_dump())
    db.add(template)
    db.commit()
    db.refresh(template)
    return template


@router.put("/{template_id}", response_model=TemplateResponse)
def update_template(
    template_id: int,
    request: TemplateUpdate,
    db: Session = Depends(get_db),
    current_user: AuthContext = Depends(get_current_user),
):
    template = get_template_or_404(db, template_id)
    for field, value in request.model_dump(exclude_none=True).items():
        setattr(template, field, value)
    db.commit()
    db.refresh(template)
    return template


@router.delete("/{template_id}", response_model=MessageResponse)
def delete_template(
    template_id: int,
    db: Session = Depends(get_db),
    current_user: AuthContext = Depends(get_current_user),
):
    template = get_template_or_404(db, template_id)
    template.is_active = False
    db.commit()
    return {"message": "Template deleted"}
