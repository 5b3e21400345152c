import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from api.routes.generation import router as generation_router
from api.schemas.generation import ModelCatalogResponse, ModelOptionSchema
from kuweni.config import Config
from kuweni.errors import KuweniError
from kuweni.logging_config import setup_logging
from kuweni.model.catalog import IMAGE_MODELS, TEXT_MODELS, VOICES

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    setup_logging()
    logger.info("🚀 Starting kuweni-ai gateway...")
    logger.info(f"   Text upstream:  {Config.pollinations.text_base_url}")
    logger.info(f"   Image upstream: {Config.pollinations.image_base_url}")
    yield
    logger.info("👋 Shutting down kuweni-ai gateway...")


app = FastAPI(title="kuweni-ai Gateway", version="0.1.0", lifespan=lifespan)

app.add_middleware(
    CORSMiddleware,
    allow_origins=Config.cors_origins,
    allow_credentials=False,  # 使用 "*" 时不能设置 credentials=True
    allow_methods=["*"],
    allow_headers=["*"],
)

app.include_router(generation_router)


@app.exception_handler(KuweniError)
async def kuweni_error_handler(request: Request, exc: KuweniError):
    logger.error(f"❌ {request.url.path}: {exc.message}")
    return JSONResponse({"error": exc.message}, status_code=exc.status_code)


@app.exception_handler(RequestValidationError)
async def request_validation_handler(request: Request, exc: RequestValidationError):
    # 请求体不是合法 JSON 等情况，统一返回 {"error": ...}
    logger.warning(f"⚠️ {request.url.path}: invalid request: {exc.errors()}")
    return JSONResponse({"error": "Invalid request body"}, status_code=400)


@app.exception_handler(Exception)
async def unhandled_error_handler(request: Request, exc: Exception):
    logger.exception(f"💥 {request.url.path}: unhandled error")
    return JSONResponse({"error": str(exc) or "Internal server error"}, status_code=500)


@app.get("/api/health")
async def health_check():
    return {"status": "ok"}


@app.get("/api/models", response_model=ModelCatalogResponse)
async def list_models():
    """前端下拉框使用的模型 / 音色列表"""
    return ModelCatalogResponse(
        text=[ModelOptionSchema(**m.model_dump()) for m in TEXT_MODELS],
        image=[ModelOptionSchema(**m.model_dump()) for m in IMAGE_MODELS],
        voice=[ModelOptionSchema(**m.model_dump()) for m in VOICES],
    )
