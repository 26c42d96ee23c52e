"""HTTP 层（FastAPI）。

只负责请求体解析与状态码映射，业务逻辑全部委托给 handlers。
处理器是同步的，FastAPI 会把它们放到线程池中执行，请求之间互不阻塞。
"""

from typing import Any, Optional

from fastapi import FastAPI, Request
from fastapi.concurrency import run_in_threadpool
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from mechanic_core.api import service
from mechanic_core.config.settings import settings
from mechanic_core.handlers.chat_handler import ChatEndpointHandler, ChatResponseEnvelope
from mechanic_core.handlers.forms_handler import FormsHandler
from mechanic_core.infrastructure.logging.logger import logger


async def _read_json(request: Request) -> Any:
    try:
        return await request.json()
    except ValueError:
        return None


def _to_response(envelope: ChatResponseEnvelope) -> JSONResponse:
    return JSONResponse(status_code=envelope.status_code, content=envelope.body)


def create_app(
    chat_handler: Optional[ChatEndpointHandler] = None,
    forms_handler: Optional[FormsHandler] = None,
) -> FastAPI:
    """创建应用；测试时可注入使用假 Provider / 临时目录的处理器。"""

    app = FastAPI(title="ApnaMechanic API", version="0.1.0")
    app.add_middleware(
        CORSMiddleware,
        allow_origins=list(settings.cors_origins),
        allow_methods=["*"],
        allow_headers=["*"],
    )

    def chat() -> ChatEndpointHandler:
        return chat_handler or service.get_default_chat_handler()

    def forms() -> FormsHandler:
        return forms_handler or service.get_default_forms_handler()

    @app.post("/api/chat")
    async def post_chat(request: Request) -> JSONResponse:
        body = await _read_json(request)
        return _to_response(await run_in_threadpool(chat().handle, body))

    @app.get("/api/chat/history")
    async def get_history() -> JSONResponse:
        try:
            items = await run_in_threadpool(chat().history)
        except Exception as e:
            logger.error("history.read_failed", extra={"extra": {"error": str(e)}})
            return JSONResponse(status_code=500, content={"message": "Error fetching chat history."})
        return JSONResponse(status_code=200, content=items)

    @app.post("/api/contact")
    async def post_contact(request: Request) -> JSONResponse:
        body = await _read_json(request)
        return _to_response(await run_in_threadpool(forms().submit_contact, body))

    @app.post("/api/book")
    async def post_booking(request: Request) -> JSONResponse:
        body = await _read_json(request)
        return _to_response(await run_in_threadpool(forms().submit_booking, body))

    @app.get("/api/health")
    async def get_health() -> dict:
        return service.health()

    return app
