"""Audio upload endpoint."""

import logging
from typing import Annotated

from fastapi import APIRouter, Depends, File, Request, UploadFile
from fastapi.exception_handlers import request_validation_exception_handler
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse

from transcription_gateway.dependencies import get_upload_handler
from transcription_gateway.domain.models import GatewayResponse
from transcription_gateway.exceptions import MissingUploadError
from transcription_gateway.handlers import UploadHandler
from transcription_gateway.handlers.upload_handler import AUDIO_FIELD

logger = logging.getLogger(__name__)

router = APIRouter(tags=["transcription"])

HandlerDep = Annotated[UploadHandler, Depends(get_upload_handler)]


def _json(status_code: int, body: GatewayResponse) -> JSONResponse:
    return JSONResponse(status_code=status_code, content=body.model_dump(exclude_none=True))


async def audio_validation_handler(
    request: Request, exc: RequestValidationError
) -> JSONResponse:
    """Reports an ``audio`` field that holds no file as a missing upload."""
    if any(tuple(error.get("loc", ())) == ("body", AUDIO_FIELD) for error in exc.errors()):
        error = MissingUploadError(AUDIO_FIELD)
        return _json(400, GatewayResponse(ok=False, error=str(error)))
    return await request_validation_exception_handler(request, exc)


@router.post(
    "/upload",
    response_model=GatewayResponse,
    response_model_exclude_none=True,
    responses={
        400: {"model": GatewayResponse, "description": "No audio file provided"},
        500: {"model": GatewayResponse, "description": "Transcription failed"},
    },
)
def upload_audio(
    handler: HandlerDep,
    audio: Annotated[
        UploadFile | None, File(description="Audio file to transcribe")
    ] = None,
):
    """
    Transcribes an audio file.

    Publishes the recognized text and the processing state to the message broker.
    """
    try:
        result = handler.handle(audio)
    except MissingUploadError as e:
        return _json(400, GatewayResponse(ok=False, error=str(e)))
    except Exception as e:
        logger.exception("Upload handling failed")
        return _json(500, GatewayResponse(ok=False, error=str(e)))

    return _json(200 if result.ok else 500, result)
