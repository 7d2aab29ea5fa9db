# mediagen/services/task_store.py
import json, time, uuid, logging
from typing import Optional, Dict, Any, List
import redis

from ..models.media_models import MediaKind, TaskState, TaskStatus, ExtractionResult
from .errors import InvalidTransitionError, TaskNotFoundError

log = logging.getLogger("mediagen")

QKEY = "mediagen:tasks:queue"   # 待处理队列（list）
HPFX = "mediagen:task:"         # 每个任务的 hash 前缀

# submitted -> running -> completed | failed; running may be re-entered to update the message
ALLOWED_TRANSITIONS: Dict[TaskState, frozenset] = {
    TaskState.submitted: frozenset({TaskState.running, TaskState.failed}),
    TaskState.running:   frozenset({TaskState.running, TaskState.completed, TaskState.failed}),
    TaskState.completed: frozenset(),
    TaskState.failed:    frozenset(),
}


def _hkey(task_id: str) -> str:
    return f"{HPFX}{task_id}"


def new_task_id() -> str:
    return uuid.uuid4().hex


class TaskStore:
    """Redis-backed state for the polling (job submission) backend."""

    def __init__(self, client: redis.Redis, ttl_seconds: int = 86400):
        self._r = client
        self.ttl_seconds = ttl_seconds

    @classmethod
    def from_url(cls, url: str, ttl_seconds: int = 86400) -> "TaskStore":
        return cls(redis.Redis.from_url(url, decode_responses=True), ttl_seconds)

    def submit(self, kind: MediaKind, prompt: str, options: Dict[str, Any]) -> str:
        """hash 保存任务内容 + list 入队"""
        task_id = new_task_id()
        hk = _hkey(task_id)
        payload: Dict[str, Any] = {
            "task_id": task_id,
            "kind": kind.value,
            "prompt": str(prompt),
            "options": json.dumps(options, ensure_ascii=False),
            "state": TaskState.submitted.value,
            "created_at": int(time.time()),
        }
        log.info(f"[redis] HSET {hk} (ttl={self.ttl_seconds}) + RPUSH {QKEY} task_id={task_id}")
        p = self._r.pipeline()
        p.hset(hk, mapping=payload)
        p.expire(hk, self.ttl_seconds)
        p.rpush(QKEY, task_id)
        p.execute()
        return task_id

    def pop_pending(self, max_n: int = 1) -> List[str]:
        n = min(max_n, int(self._r.llen(QKEY)))
        ids: List[str] = []
        for _ in range(n):
            t = self._r.lpop(QKEY)
            if t:
                ids.append(t)
        log.info(f"[redis] LPOP {QKEY} -> {ids}")
        return ids

    def requeue(self, task_id: str):
        log.info(f"[redis] RPUSH {QKEY} task_id={task_id} (requeue)")
        self._r.rpush(QKEY, task_id)

    def get_params(self, task_id: str) -> Optional[Dict[str, Any]]:
        data = self._r.hgetall(_hkey(task_id))
        if not data:
            return None
        return {
            "kind": MediaKind(data["kind"]),
            "prompt": data.get("prompt", ""),
            "options": json.loads(data.get("options") or "{}"),
        }

    def mark_running(self, task_id: str, message: Optional[str] = None):
        m: Dict[str, Any] = {}
        if message is not None:
            m["message"] = str(message)
        self._transition(task_id, TaskState.running, m)

    def complete(self, task_id: str, result: ExtractionResult):
        self._transition(task_id, TaskState.completed, {
            "result": result.model_dump_json(),
            "finished_at": int(time.time()),
        })

    def fail(self, task_id: str, err: str):
        self._transition(task_id, TaskState.failed, {
            "message": str(err),
            "finished_at": int(time.time()),
        })

    def get(self, task_id: str) -> Optional[TaskStatus]:
        hk = _hkey(task_id)
        data = self._r.hgetall(hk)
        log.info(f"[redis] HGETALL {hk} -> {'hit' if data else 'miss'}")
        if not data:
            return None
        result = None
        if data.get("result"):
            result = ExtractionResult.model_validate_json(data["result"])
        return TaskStatus(
            task_id=task_id,
            kind=MediaKind(data["kind"]),
            state=TaskState(data["state"]),
            message=data.get("message"),
            result=result,
        )

    def _transition(self, task_id: str, target: TaskState, fields: Dict[str, Any]):
        hk = _hkey(task_id)
        current = self._r.hget(hk, "state")
        if current is None:
            raise TaskNotFoundError(task_id)
        if target not in ALLOWED_TRANSITIONS[TaskState(current)]:
            raise InvalidTransitionError(task_id, current, target.value)
        log.info(f"[redis] HSET {hk} state={current}->{target.value}")
        self._r.hset(hk, mapping={"state": target.value, **fields})
