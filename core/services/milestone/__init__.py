from core.services.milestone.service import MilestoneService

__all__ = ["MilestoneService"]
