# mediagen/main.py
from fastapi import FastAPI, HTTPException
from fastapi.responses import JSONResponse
import time, logging, sys, traceback
from typing import Dict, Optional
from fastapi.middleware.cors import CORSMiddleware

# 降低 httpx/httpcore 的日志噪音
for name in ("httpx", "httpcore"):
    logging.getLogger(name).setLevel(logging.WARNING)

# ===== logging setup =====
logging.basicConfig(
    level=logging.INFO,
    stream=sys.stdout,
    format="%(asctime)s [%(levelname)s] %(message)s",
)
log = logging.getLogger("mediagen")

from starlette.middleware.base import BaseHTTPMiddleware
from starlette.requests import Request as StarletteRequest
from starlette.responses import Response as StarletteResponse

import httpx
import openai


class AccessLogMiddleware(BaseHTTPMiddleware):
    async def dispatch(self, request: StarletteRequest, call_next):
        t0 = time.time()
        try:
            log.info(f"[req] {request.method} {request.url.path} q={dict(request.query_params)}")
            resp: StarletteResponse = await call_next(request)
            dt = int((time.time() - t0) * 1000)
            log.info(f"[res] {request.method} {request.url.path} -> {resp.status_code} {dt}ms")
            return resp
        except Exception:
            dt = int((time.time() - t0) * 1000)
            log.error(f"[res] {request.method} {request.url.path} -> 500 {dt}ms\n{traceback.format_exc()}")
            raise


from mediagen.config import Settings
from mediagen.models.media_models import MediaKind, ExtractionResult
from mediagen.models.api_models import ImageGenerateIn, VideoGenerateIn, EnqueueResponse, JobPollResponse
from mediagen.models.options_models import (
    with_size, with_quality, with_negative_prompt, with_duration, with_aspect_ratio, with_reference_image,
)
from mediagen.services.errors import UrlNotFoundError, UnsupportedOperationError
from mediagen.services.llm_client import ChatTextClient
from mediagen.services.image_client import ChatImageClient
from mediagen.services.video_client import ChatVideoClient
from mediagen.services.media_backend import ChatMediaBackend, QueuedMediaBackend
from mediagen.services.task_store import TaskStore
from mediagen.services.worker import run_tick


def _image_modifiers(p: ImageGenerateIn) -> list:
    mods = []
    if p.size is not None:
        mods.append(with_size(p.size))
    if p.quality is not None:
        mods.append(with_quality(p.quality))
    if p.negative_prompt is not None:
        mods.append(with_negative_prompt(p.negative_prompt))
    return mods


def _video_modifiers(p: VideoGenerateIn) -> list:
    mods = [with_reference_image(p.image_url)]
    if p.duration is not None:
        mods.append(with_duration(p.duration))
    if p.aspect_ratio is not None:
        mods.append(with_aspect_ratio(p.aspect_ratio))
    return mods


def create_app(
    settings: Optional[Settings] = None,
    backends: Optional[Dict[MediaKind, ChatMediaBackend]] = None,
    store: Optional[TaskStore] = None,
) -> FastAPI:
    settings = settings or Settings.from_env()
    if settings.debug:
        log.setLevel(logging.DEBUG)

    app = FastAPI(title="Media Generation Backend", version="0.1.0")
    app.add_middleware(AccessLogMiddleware)
    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_allow_origins,
        allow_credentials=True,
        allow_methods=["GET", "POST", "OPTIONS"],
        allow_headers=["*"],
        expose_headers=["*"],
    )

    # built on first use so the app can start without credentials or redis
    _backends: Dict[MediaKind, ChatMediaBackend] = dict(backends or {})
    _store: Dict[str, TaskStore] = {"store": store} if store is not None else {}

    def chat_backend(kind: MediaKind) -> ChatMediaBackend:
        if kind not in _backends:
            model = settings.image_model if kind == MediaKind.image else settings.video_model
            text_client = ChatTextClient(
                model,
                api_key=settings.openai_api_key,
                base_url=settings.openai_base_url,
                timeout_seconds=settings.llm_timeout_seconds,
            )
            cls = ChatImageClient if kind == MediaKind.image else ChatVideoClient
            _backends[kind] = cls(text_client)
        return _backends[kind]

    def task_store() -> TaskStore:
        if "store" not in _store:
            if not settings.redis_url:
                raise HTTPException(status_code=503, detail="job queue not configured (REDIS_URL)")
            _store["store"] = TaskStore.from_url(settings.redis_url, settings.job_ttl_seconds)
        return _store["store"]

    def run_sync(kind: MediaKind, prompt: str, mods: list) -> ExtractionResult:
        try:
            return chat_backend(kind).generate(prompt, mods)
        except UrlNotFoundError as e:
            log.warning(f"[{kind.value}] {e.failure.reason}")
            raise HTTPException(status_code=502, detail=e.failure.model_dump())
        except (openai.OpenAIError, httpx.HTTPError) as e:
            log.error(f"[{kind.value}] upstream error: {type(e).__name__}: {e}")
            raise HTTPException(status_code=502, detail=f"upstream error: {e}")

    @app.get("/health", tags=["meta"])
    def health() -> dict:
        return {"status": "ok"}

    @app.get("/", tags=["meta"])
    def root() -> dict:
        return {"message": "Media Generation Backend is running"}

    # ========= 同步：chat 模型直接返回 URL =========
    @app.post("/images/generate", response_model=ExtractionResult, tags=["generate"])
    def generate_image(p: ImageGenerateIn):
        return run_sync(MediaKind.image, p.prompt, _image_modifiers(p))

    @app.post("/videos/generate", response_model=ExtractionResult, tags=["generate"])
    def generate_video(p: VideoGenerateIn):
        return run_sync(MediaKind.video, p.prompt, _video_modifiers(p))

    @app.get("/tasks/{task_id}", tags=["generate"])
    def task_status(task_id: str, kind: MediaKind = MediaKind.image):
        try:
            return chat_backend(kind).get_status(task_id)
        except UnsupportedOperationError as e:
            raise HTTPException(status_code=501, detail=str(e))

    # ========= 排队：提交任务，之后轮询 =========
    def enqueue(kind: MediaKind, prompt: str, mods: list) -> JSONResponse:
        status = QueuedMediaBackend(kind, task_store()).generate(prompt, mods)
        body = EnqueueResponse(job_id=status.task_id, kind=kind, status=status.state)
        return JSONResponse(status_code=202, content=body.model_dump(mode="json"))

    @app.post("/jobs/images", tags=["jobs"])
    def enqueue_image(p: ImageGenerateIn) -> JSONResponse:
        return enqueue(MediaKind.image, p.prompt, _image_modifiers(p))

    @app.post("/jobs/videos", tags=["jobs"])
    def enqueue_video(p: VideoGenerateIn) -> JSONResponse:
        return enqueue(MediaKind.video, p.prompt, _video_modifiers(p))

    @app.get("/jobs/{job_id}", response_model=JobPollResponse, tags=["jobs"])
    def poll(job_id: str):
        log.info(f"[poll] job_id={job_id}")
        status = task_store().get(job_id)
        if status is None:
            log.warning(f"[poll] job_id={job_id} not found")
            raise HTTPException(status_code=404, detail="job not found")
        return JobPollResponse(
            job_id=job_id,
            kind=status.kind,
            status=status.state,
            message=status.message,
            result=status.result,
        )

    @app.get("/worker/tick", tags=["jobs"])
    def worker_tick(single: Optional[str] = None):
        log.info(f"[worker] start single={single!r}")
        store = task_store()
        backends_by_kind = {kind: chat_backend(kind) for kind in MediaKind}
        handled = run_tick(store, backends_by_kind, single=single)
        return {"handled": len(handled), "single": single}

    return app


app = create_app()
