"""Control API routes."""

from typing import Any

from pydantic import BaseModel
from fastapi import APIRouter, HTTPException

from ...app import IApplication


class StatusResponse(BaseModel):
    """Response model for status."""

    status: str
    message: str | None = None


class ConversationInfoResponse(BaseModel):
    status: str
    data: dict[str, Any]


# Global SIM instance (will be set by main app)
_sim_instance: Any = None


def set_sim_instance(sim: Any) -> None:
    """Set the global SIM instance."""
    global _sim_instance
    _sim_instance = sim


def get_sim_instance() -> Any:
    """Get the global SIM instance."""
    return _sim_instance


def create_control_router(app: IApplication) -> APIRouter:
    """Create control router."""
    router = APIRouter(tags=["control"])

    @router.get("/health", response_model=StatusResponse)
    async def health() -> dict:
        return {"status": "healthy"}

    @router.get("/conversation-info", response_model=ConversationInfoResponse)
    async def conversation_info() -> dict:
        """Version, description and state count of the loaded definition."""
        try:
            return {"status": "success", "data": app.resolver.info()}
        except Exception as e:
            raise HTTPException(status_code=500, detail=str(e))

    @router.post("/reset-conversation/{user_id}", response_model=StatusResponse)
    async def reset_conversation(user_id: str) -> dict:
        """Forget a user's position, form and FAQ history."""
        try:
            app.resolver.reset(user_id)
        except Exception as e:
            raise HTTPException(status_code=500, detail=str(e))
        return {"status": "success", "message": f"Conversation reset for user {user_id}"}

    @router.post("/api/control/reset", response_model=StatusResponse)
    async def reset_system() -> dict:
        """Reset system data between test runs."""
        try:
            await app.reset()
            return {"status": "ok"}
        except Exception as e:
            raise HTTPException(status_code=500, detail=str(e))

    @router.post("/api/control/sim/start", response_model=StatusResponse)
    async def start_sim() -> dict:
        """Start SIM simulation."""
        if not _sim_instance:
            raise HTTPException(status_code=404, detail="SIM not configured")
        try:
            await _sim_instance.start()
            return {"status": "ok"}
        except Exception as e:
            raise HTTPException(status_code=500, detail=str(e))

    @router.post("/api/control/sim/stop", response_model=StatusResponse)
    async def stop_sim() -> dict:
        """Stop SIM simulation."""
        if not _sim_instance:
            raise HTTPException(status_code=404, detail="SIM not configured")
        try:
            await _sim_instance.stop()
            return {"status": "ok"}
        except Exception as e:
            raise HTTPException(status_code=500, detail=str(e))

    return router
