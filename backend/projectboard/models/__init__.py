from projectboard.models.billing_milestone import BillingMilestone
from projectboard.models.manufacturing import ManufacturingBay, ManufacturingSchedule
from projectboard.models.milestone import ProjectMilestone
from projectboard.models.project import Project
from projectboard.models.task import Task

__all__ = [
    "BillingMilestone",
    "ManufacturingBay",
    "ManufacturingSchedule",
    "Project",
    "ProjectMilestone",
    "Task",
]
