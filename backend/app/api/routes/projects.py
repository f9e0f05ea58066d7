from fastapi import APIRouter, Depends, Query, status
from sqlalchemy import select
from sqlalchemy.orm import Session

from app.api.deps import Actor, get_actor, get_db
from app.models.enums import ProjectStatus
from app.models.project import Project, project_associations
from app.schemas.projects import ProjectCreateRequest, ProjectOut, ProjectUpdateRequest
from app.services.activity import record_activity
from app.services.projects import (
    create_project,
    get_project_or_404,
    project_association_names,
    project_to_out,
    update_project,
)


router = APIRouter(prefix="/projects", tags=["projects"])

MODULE = "Projects Management"


def query_projects(
    db: Session,
    *,
    search: str | None = None,
    status_filter: ProjectStatus | None = None,
    enterprise_type: str | None = None,
    association_id: int | None = None,
) -> list[Project]:
    statement = select(Project).order_by(Project.created_at.desc(), Project.id.desc())
    if status_filter is not None:
        statement = statement.where(Project.status == status_filter)
    if enterprise_type:
        statement = statement.where(Project.enterprise_type.ilike(enterprise_type))
    if association_id is not None:
        linked = select(project_associations.c.project_id).where(
            project_associations.c.association_id == association_id
        )
        statement = statement.where(
            (Project.association_id == association_id) | Project.id.in_(linked)
        )
    projects = list(db.scalars(statement).all())
    if search:
        needle = search.lower()
        projects = [
            project
            for project in projects
            if needle in project.project_name.lower()
            or any(needle in name.lower() for name in project_association_names(project))
        ]
    return projects


@router.get("", response_model=list[ProjectOut])
def list_projects(
    search: str | None = None,
    status_filter: ProjectStatus | None = Query(default=None, alias="status"),
    enterprise_type: str | None = None,
    association_id: int | None = None,
    db: Session = Depends(get_db),
) -> list[ProjectOut]:
    projects = query_projects(
        db,
        search=search,
        status_filter=status_filter,
        enterprise_type=enterprise_type,
        association_id=association_id,
    )
    return [project_to_out(project) for project in projects]


@router.get("/{project_id}", response_model=ProjectOut)
def get_project(project_id: int, db: Session = Depends(get_db)) -> ProjectOut:
    return project_to_out(get_project_or_404(db, project_id))


@router.post("", response_model=ProjectOut, status_code=status.HTTP_201_CREATED)
def create(
    payload: ProjectCreateRequest,
    db: Session = Depends(get_db),
    actor: Actor = Depends(get_actor),
) -> ProjectOut:
    project = create_project(db, payload)
    db.flush()
    record_activity(
        db,
        module=MODULE,
        action="CREATE",
        details=f"Created project {project.project_name}",
        user=actor.user,
        ip_address=actor.ip_address,
        metadata={
            "project_id": project.id,
            "association_ids": [association.id for association in project.associations],
        },
    )
    db.commit()
    db.refresh(project)
    return project_to_out(project)


@router.patch("/{project_id}", response_model=ProjectOut)
def update(
    project_id: int,
    payload: ProjectUpdateRequest,
    db: Session = Depends(get_db),
    actor: Actor = Depends(get_actor),
) -> ProjectOut:
    project = get_project_or_404(db, project_id)
    sections = update_project(db, project, payload)
    record_activity(
        db,
        module=MODULE,
        action="UPDATE",
        details=f"Updated project {project.project_name}",
        user=actor.user,
        ip_address=actor.ip_address,
        metadata={"project_id": project.id, "sections": sections},
    )
    db.commit()
    db.refresh(project)
    return project_to_out(project)


@router.delete("/{project_id}", status_code=status.HTTP_204_NO_CONTENT)
def delete(
    project_id: int,
    db: Session = Depends(get_db),
    actor: Actor = Depends(get_actor),
) -> None:
    project = get_project_or_404(db, project_id)
    name = project.project_name
    db.delete(project)
    record_activity(
        db,
        module=MODULE,
        action="DELETE",
        details=f"Deleted project {name}",
        user=actor.user,
        ip_address=actor.ip_address,
        metadata={"project_id": project_id},
    )
    db.commit()
    return None
