"""
System endpoints - Task introspection and health
"""

from fastapi import APIRouter, Depends
from typing import Dict, Any

from api.dependencies import get_service_container
from lifecycle.task_registry import TaskRegistry
from services.service_container import ServiceContainer
from utils.logger import get_logger, LogCategory

log = get_logger().for_category(LogCategory.API)

router = APIRouter(prefix="/system", tags=["System"])


@router.get("/health")
async def health(
    services: ServiceContainer = Depends(get_service_container)
) -> Dict[str, Any]:
    """Liveness plus a glance at what is loaded"""
    deck = services.deck_service
    return {
        "status": "healthy",
        "deck": deck.deck.meta.title,
        "slides": deck.slide_count,
        "presenting": services.presentation.is_presenting,
        "channel_listeners": services.channel_hub.listener_count(services.presentation.channel_name),
    }


@router.get("/tasks/summary")
async def get_task_summary() -> Dict[str, Any]:
    """
    Get high-level task summary.

    Returns:
        - summary: Human-readable summary string
        - total: Total tasks tracked (all time)
        - active: Currently running tasks
        - failed: Tasks that ended with exceptions
        - cancelled: Tasks that were cancelled
    """
    registry = TaskRegistry.instance()
    return {
        "summary": registry.summary(),
        "total": len(registry.list_all()),
        "active": len(registry.active()),
        "failed": len(registry.failed()),
        "cancelled": len(registry.cancelled())
    }


@router.get("/tasks")
async def get_all_tasks() -> Dict[str, Any]:
    """Detailed information about all tracked tasks"""
    registry = TaskRegistry.instance()

    tasks = []
    for r in registry.list_all():
        if r.task.done():
            if r.cancelled:
                status = "cancelled"
            elif r.finished_with_error:
                status = "failed"
            else:
                status = "completed"
        else:
            status = "running"

        tasks.append({
            "id": r.info.id,
            "category": r.info.category.name,
            "description": r.info.description,
            "created_at": r.info.created_at,
            "status": status,
            "error": str(r.finished_with_error) if r.finished_with_error else None,
        })

    return {
        "count": len(tasks),
        "tasks": tasks
    }
