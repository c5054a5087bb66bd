"""
FastAPI 应用入口
"""
import logging

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from arena.config import settings, validate_config
from arena.routers import arena_router

logger = logging.getLogger(__name__)

# 创建 FastAPI 应用
app = FastAPI(
    title="Odyssey Arena API",
    description="回合制双人对战：行动分类、动量计分与赛后进化",
    version="0.1.0",
)

# 配置 CORS
app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.cors_origins,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

# 注册路由
app.include_router(arena_router, prefix=settings.api_prefix, tags=["Arena"])


@app.on_event("startup")
async def startup_event():
    """应用启动时的初始化"""
    if validate_config():
        logger.info("configuration ok, narration model=%s", settings.gemini_flash_model)
    else:
        logger.info("running with local narration only")
    logger.info("API docs: http://localhost:8000/docs")


@app.get("/")
async def root():
    """根路径"""
    return {
        "message": "Odyssey Arena API",
        "version": "0.1.0",
        "docs": "/docs",
    }


@app.get("/health")
async def health_check():
    """健康检查"""
    return {"status": "healthy"}

