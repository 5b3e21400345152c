from typing import Optional
from fastapi import APIRouter, Depends, Query
from fastapi.responses import JSONResponse, Response

from api.deps import get_gateway
from api.schemas.generation import (
    ChatRequest,
    ChatResponse,
    ErrorResponse,
    ImageRequest,
    ImageResponse,
    VoiceRequest,
    VoiceResponse,
)
from kuweni.errors import KuweniError
from kuweni.service.gateway_client import LocalGateway
from kuweni.service.proxy_service import PROXY_ERROR_DETAILS, proxy_response_headers

router = APIRouter(prefix="/api", tags=["generation"])

_errors = {400: {"model": ErrorResponse}, 500: {"model": ErrorResponse}}


@router.post("/chat", response_model=ChatResponse, responses=_errors)
def chat(body: ChatRequest, gateway: LocalGateway = Depends(get_gateway)):
    """转发消息到文本生成服务"""
    reply = gateway.chat(body.message, body.model)
    return ChatResponse(response=reply.response, model=reply.model)


@router.post("/generate-image", response_model=ImageResponse, responses=_errors)
def generate_image(body: ImageRequest, gateway: LocalGateway = Depends(get_gateway)):
    """探测候选 URL，返回直链和代理链接"""
    result = gateway.generate_image(body.prompt, body.model)
    return ImageResponse(
        image_url=result.image_url,
        proxy_url=result.proxy_url,
        model=result.model,
        prompt=result.prompt,
    )


@router.post("/generate-voice", response_model=VoiceResponse, responses=_errors)
def generate_voice(body: VoiceRequest, gateway: LocalGateway = Depends(get_gateway)):
    result = gateway.generate_voice(body.prompt, body.voice)
    return VoiceResponse(audio_url=result.audio_url, voice=result.voice)


@router.get(
    "/proxy-image",
    response_class=Response,
    responses={**_errors, 504: {"model": ErrorResponse}},
)
def proxy_image(
    url: Optional[str] = Query(default=None),
    gateway: LocalGateway = Depends(get_gateway),
):
    """同源转发外部图片字节"""
    try:
        image = gateway.fetch_image(url)
    except KuweniError as e:
        body = {"error": e.message}
        if e.status_code != 400:
            body["details"] = PROXY_ERROR_DETAILS
        return JSONResponse(body, status_code=e.status_code)

    return Response(
        content=image.content,
        headers=proxy_response_headers(image.content_type, len(image.content)),
    )
