from fastapi import APIRouter, Depends, HTTPException
from pydantic import BaseModel, Field
from typing import List, Optional
from datetime import datetime
import logging

from taskease.api.deps import get_task_service
from taskease.models.task import Task, TaskFrequency
from taskease.models.task_update import TaskComment, TaskUpdateType
from taskease.services.task import TaskService

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api/tasks", tags=["tasks"])


# Request/Response models
class CreateTaskRequest(BaseModel):
    created_by: str = Field(min_length=1)
    task_name: str = Field(min_length=1)
    task_description: Optional[str] = None
    assigned_to: str = Field(min_length=1)
    assigned_name: Optional[str] = None
    task_frequency: TaskFrequency = TaskFrequency.ONE_TIME
    due_date: Optional[datetime] = None
    priority: Optional[str] = None


class CompleteTaskRequest(BaseModel):
    email: str = Field(min_length=1)


class CreateTaskUpdateRequest(BaseModel):
    update_text: str
    updated_by: str
    update_type: TaskUpdateType = TaskUpdateType.COMMENT


class TaskResponse(BaseModel):
    success: bool = True
    message: Optional[str] = None
    task: Task


class TaskListResponse(BaseModel):
    tasks: List[Task]
    count: int


class CompleteTaskResponse(BaseModel):
    success: bool = True
    message: str
    completed_task: Task
    generated_task: Optional[Task] = None


class DeleteResponse(BaseModel):
    success: bool
    message: str


class TaskUpdateResponse(BaseModel):
    success: bool = True
    message: str
    update: TaskComment


class TaskUpdateListResponse(BaseModel):
    success: bool = True
    message: str
    updates: List[TaskComment]


def _server_error(action: str, e: Exception) -> HTTPException:
    logger.error(f"Error {action}: {e}", exc_info=True)
    return HTTPException(status_code=500, detail="Server Error")


# CRUD Endpoints
@router.get("", response_model=TaskListResponse)
async def list_tasks(
    assigned_to: Optional[str] = None,
    created_by: Optional[str] = None,
    service: TaskService = Depends(get_task_service),
):
    """List tasks assigned to and/or created by a user"""
    try:
        tasks = await service.list_tasks(assigned_to=assigned_to, created_by=created_by)
    except Exception as e:
        raise _server_error("listing tasks", e)

    return {"tasks": tasks, "count": len(tasks)}


@router.get("/{task_id}", response_model=TaskResponse)
async def get_task(task_id: int, service: TaskService = Depends(get_task_service)):
    """Get a single task by ID"""
    try:
        task = await service.get_task(task_id)
    except Exception as e:
        raise _server_error(f"fetching task {task_id}", e)

    if not task:
        raise HTTPException(status_code=404, detail="Task not found")

    return {"task": task}


@router.post("", response_model=TaskResponse, status_code=201)
async def create_task(request: CreateTaskRequest, service: TaskService = Depends(get_task_service)):
    """Create a task and assign it to a registered user"""
    try:
        task = await service.create_task(
            created_by=request.created_by,
            task_name=request.task_name,
            task_description=request.task_description,
            assigned_to=request.assigned_to,
            assigned_name=request.assigned_name,
            task_frequency=request.task_frequency,
            due_date=request.due_date,
            priority=request.priority,
        )
    except Exception as e:
        raise _server_error("creating task", e)

    if not task:
        raise HTTPException(
            status_code=404,
            detail="The assigned email is not registered in the system.",
        )

    return {"message": "Task created successfully", "task": task}


@router.post("/{task_id}/complete", response_model=CompleteTaskResponse)
async def complete_task(
    task_id: int,
    request: CompleteTaskRequest,
    service: TaskService = Depends(get_task_service),
):
    """Mark a task as completed; recurring tasks get their next occurrence"""
    try:
        result = await service.complete_task(task_id, request.email)
    except Exception as e:
        raise _server_error(f"completing task {task_id}", e)

    if not result:
        raise HTTPException(
            status_code=404,
            detail="Task not found or not assigned to this email.",
        )

    return {
        "message": "Task marked as completed and recurring task generated (if applicable).",
        "completed_task": result.completed_task,
        "generated_task": result.generated_task,
    }


@router.delete("/{task_id}", response_model=DeleteResponse)
async def delete_task(task_id: int, service: TaskService = Depends(get_task_service)):
    """Delete a task"""
    try:
        success = await service.delete_task(task_id)
    except Exception as e:
        raise _server_error(f"deleting task {task_id}", e)

    if not success:
        raise HTTPException(status_code=404, detail="Task not found")

    return {"success": True, "message": "Task deleted successfully"}


# Task updates (comments)
@router.get("/{task_id}/updates", response_model=TaskUpdateListResponse)
async def list_task_updates(task_id: int, service: TaskService = Depends(get_task_service)):
    """Comments of a task, oldest first"""
    try:
        updates = await service.list_comments(task_id)
    except Exception as e:
        raise _server_error(f"listing updates of task {task_id}", e)

    if updates is None:
        raise HTTPException(status_code=404, detail="Task not found.")

    return {"message": "Task updates fetched successfully!", "updates": updates}


@router.post("/{task_id}/updates", response_model=TaskUpdateResponse, status_code=201)
async def create_task_update(
    task_id: int,
    request: CreateTaskUpdateRequest,
    service: TaskService = Depends(get_task_service),
):
    """Add a comment to a task"""
    if not request.update_text.strip() or not request.updated_by.strip():
        raise HTTPException(
            status_code=400,
            detail="Update text and updater's identifier are required.",
        )

    try:
        update = await service.add_comment(
            task_id,
            update_text=request.update_text,
            updated_by=request.updated_by,
            update_type=request.update_type,
        )
    except Exception as e:
        raise _server_error(f"adding update to task {task_id}", e)

    if not update:
        raise HTTPException(status_code=404, detail="Task not found.")

    return {"message": "Task update added successfully!", "update": update}
