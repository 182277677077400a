"""FastAPI主应用入口

对外提供装车订单各参与方使用的接口：
- ERP/B2B 与装车系统下单
- 地磅登记皮重/毛重
- 装车系统上报流量计数据
- 温度告警查询、确认与配置
业务错误统一由异常处理器映射为 404/409/400/500。
"""

import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI, Request
from fastapi.responses import JSONResponse

from .api.v1 import orders_router, weighing_router, charging_router, alarms_router
from .config.settings import settings
from .core.exceptions import LoadingOrderError, NOT_FOUND, CONFLICT, BAD_REQUEST, SERVER_ERROR
from .database.connection import Base, engine

logger = logging.getLogger(__name__)

STATUS_BY_CATEGORY = {
    NOT_FOUND: 404,
    CONFLICT: 409,
    BAD_REQUEST: 400,
    SERVER_ERROR: 500,
}


def configure_logging():
    """按 LOG_LEVEL 配置根日志"""
    logging.basicConfig(
        level=settings.LOG_LEVEL.upper(),
        format="%(asctime)s %(levelname)s [%(name)s] %(message)s",
    )


@asynccontextmanager
async def lifespan(app: FastAPI):
    configure_logging()
    Base.metadata.create_all(bind=engine)
    logger.info("%s %s started", settings.APP_TITLE, settings.APP_VERSION)
    yield


# 创建FastAPI应用实例
app = FastAPI(
    title=settings.APP_TITLE,
    description=settings.APP_DESCRIPTION,
    version=settings.APP_VERSION,
    lifespan=lifespan,
)


@app.exception_handler(LoadingOrderError)
async def loading_order_error_handler(request: Request, exc: LoadingOrderError):
    status_code = STATUS_BY_CATEGORY.get(exc.category, 500)
    if status_code >= 500:
        logger.error("%s %s failed: %s", request.method, request.url.path, exc.message)
    return JSONResponse(status_code=status_code, content={"error": exc.kind, "detail": exc.message})


# 挂载API路由
app.include_router(orders_router, prefix="/api/v1")
app.include_router(weighing_router, prefix="/api/v1")
app.include_router(charging_router, prefix="/api/v1")
app.include_router(alarms_router, prefix="/api/v1")


@app.get("/health")
def health():
    return {"status": "ok"}
