"""
Omnivore Webhook Handler.

Receives Omnivore label webhooks and runs the label automation inline.
The response is plain text: 200 for success or a benign no-op, 400 for
payloads that cannot be acted on, 500 when Omnivore or the model fails.
"""
from __future__ import annotations

import json
import logging

from fastapi import APIRouter, Depends, Request
from fastapi.responses import PlainTextResponse

from omnivore_annotate.app.dependencies import get_webhook_handler
from omnivore_annotate.automation import LabelWebhookHandler

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/webhook", tags=["webhooks"])


@router.post(
    "/omnivore",
    summary="Receive Omnivore label webhook",
    response_class=PlainTextResponse,
    responses={
        200: {"description": "Action applied, or nothing new to apply"},
        400: {"description": "Invalid payload or no trigger labels"},
        500: {"description": "Omnivore or completion provider failure"},
    },
)
async def receive_omnivore_webhook(
    request: Request,
    handler: LabelWebhookHandler = Depends(get_webhook_handler),
) -> PlainTextResponse:
    """
    Handle a label event from Omnivore.

    1. Parse the JSON body
    2. Select trigger labels (``do``, ``do:*``)
    3. Run at most one action (tags first, otherwise a note)
    4. Return the outcome as plain text
    """
    try:
        body = await request.json()
    except (json.JSONDecodeError, UnicodeDecodeError) as e:
        logger.warning(f"Omnivore webhook with non-JSON body: {e}")
        return PlainTextResponse("Webhook payload must be valid JSON.", status_code=400)

    logger.info(
        f"Omnivore webhook: action={body.get('action') if isinstance(body, dict) else None}"
    )
    logger.debug(f"Received webhook payload: {body}")

    result = await handler.handle(body)
    return PlainTextResponse(result.message, status_code=result.status_code)
