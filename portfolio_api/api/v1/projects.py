from typing import Any, List

from fastapi import APIRouter, Body, Depends, Response, status
from sqlalchemy.orm import Session

from portfolio_api.api.deps import AdminIdentity, require_admin
from portfolio_api.db.session import get_db
from portfolio_api.models.project import Project
from portfolio_api.schemas.common import IdList
from portfolio_api.schemas.project import ProjectCreate, ProjectResponse, ProjectUpdate
from portfolio_api.services.content_service import ContentService
from portfolio_api.utils.response import success, serialize, validation_error
from portfolio_api.utils.validation import Invalid, parse_model

router = APIRouter()


@router.get("", response_model=List[ProjectResponse])
def list_projects(db: Session = Depends(get_db)):
    return db.query(Project).order_by(Project.display_order, Project.id).all()


@router.post("/reorder")
def reorder_projects(
    payload: Any = Body(None),
    db: Session = Depends(get_db),
    _: AdminIdentity = Depends(require_admin),
):
    """Set displayOrder from the position of each id in the list."""
    result = parse_model(IdList, payload)
    if isinstance(result, Invalid):
        return validation_error(result.errors)

    positions = {project_id: index for index, project_id in enumerate(result.value.ids)}
    for project in db.query(Project).filter(Project.id.in_(positions.keys())).all():
        project.display_order = positions[project.id]
    db.commit()
    return success(message="Projects reordered")


@router.get("/{project_id}", response_model=ProjectResponse)
def get_project(project_id: int, db: Session = Depends(get_db)):
    return ContentService.get_or_404(db, Project, project_id, "Project")


@router.post("", status_code=status.HTTP_201_CREATED)
def create_project(
    payload: Any = Body(None),
    db: Session = Depends(get_db),
    _: AdminIdentity = Depends(require_admin),
):
    result = parse_model(ProjectCreate, payload)
    if isinstance(result, Invalid):
        return validation_error(result.errors)

    project = ContentService.create(db, Project, result.value.model_dump())
    return success(
        data=serialize(ProjectResponse, project),
        message="Project created successfully",
        status_code=status.HTTP_201_CREATED,
    )


@router.put("/{project_id}")
def update_project(
    project_id: int,
    payload: Any = Body(None),
    db: Session = Depends(get_db),
    _: AdminIdentity = Depends(require_admin),
):
    project = ContentService.get_or_404(db, Project, project_id, "Project")
    result = parse_model(ProjectUpdate, payload)
    if isinstance(result, Invalid):
        return validation_error(result.errors)

    project = ContentService.update(db, project, result.value.model_dump(exclude_unset=True))
    return success(data=serialize(ProjectResponse, project), message="Project updated successfully")


@router.delete("/{project_id}", status_code=status.HTTP_204_NO_CONTENT)
def delete_project(
    project_id: int,
    db: Session = Depends(get_db),
    _: AdminIdentity = Depends(require_admin),
):
    project = ContentService.get_or_404(db, Project, project_id, "Project")
    ContentService.delete(db, project)
    return Response(status_code=status.HTTP_204_NO_CONTENT)
