"""External group mapping presentation package."""

from iam.presentation.external_groups.routes import router

__all__ = ["router"]
