"""Qontak webhook route."""

from pydantic import BaseModel
from fastapi import APIRouter, HTTPException

from ...app import IApplication
from ...logging_config import get_logger

logger = get_logger(__name__)

CUSTOMER_DATA_EVENT = "receive_message_from_customer"
CUSTOMER_WEBHOOK_EVENT = "message_interaction"
CUSTOMER_PARTICIPANT = "customer"


class WebhookPayload(BaseModel):
    """Subset of the Qontak webhook body the bot reads; extra keys are ignored."""

    data_event: str | None = None
    webhook_event: str | None = None
    participant_type: str | None = None
    room_id: str | None = None
    text: str | None = None

    @property
    def is_customer_message(self) -> bool:
        return (
            self.data_event == CUSTOMER_DATA_EVENT
            and self.webhook_event == CUSTOMER_WEBHOOK_EVENT
            and self.participant_type == CUSTOMER_PARTICIPANT
            and bool(self.room_id)
        )


class WebhookResponse(BaseModel):
    status: str
    message: str


def create_webhook_router(app: IApplication) -> APIRouter:
    """Create webhook router."""
    router = APIRouter(tags=["webhook"])

    @router.post("/webhook", response_model=WebhookResponse)
    async def receive_webhook(payload: WebhookPayload) -> dict:
        """Resolve a customer message and send the reply through Qontak."""
        if payload.is_customer_message:
            try:
                await app.dialogue_agent.handle_message(payload.room_id, payload.text or "")
            except Exception as e:
                logger.error("Webhook processing failed: %s", e, exc_info=True)
                raise HTTPException(status_code=500, detail=str(e))
        else:
            logger.debug("Ignoring webhook event %s", payload.data_event)

        return {"status": "ok", "message": "Webhook received successfully"}

    return router
