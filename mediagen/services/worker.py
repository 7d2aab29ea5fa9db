# mediagen/services/worker.py
import time, logging, traceback
from typing import Mapping, List, Optional

from ..models.media_models import MediaKind
from ..models.options_models import with_overrides
from .media_backend import ChatMediaBackend
from .task_store import TaskStore
from .errors import InvalidTransitionError

log = logging.getLogger("mediagen")


def _record_failure(store: TaskStore, task_id: str, err: Exception):
    try:
        store.fail(task_id, f"{type(err).__name__}: {err}")
    except InvalidTransitionError as e:
        # another run already finished the job; its outcome stands
        log.warning(f"[worker] task_id={task_id} failure not recorded: {e}")


def process_task(store: TaskStore, task_id: str, backends: Mapping[MediaKind, ChatMediaBackend]) -> bool:
    """
    Run one queued job through the chat backend of its kind.
    Returns True when the job completed; any failure is recorded on the job.
    Store errors while recording the failure propagate to the caller.
    """
    try:
        params = store.get_params(task_id)
        if not params:
            log.warning(f"[worker] task_id={task_id} hgetall miss")
            return False

        kind = params["kind"]
        store.mark_running(task_id, "generating")
        t0 = time.time()
        result = backends[kind].generate(params["prompt"], [with_overrides(params["options"])])
        dt = int((time.time() - t0) * 1000)
        store.complete(task_id, result)
        log.info(f"[worker] task_id={task_id} kind={kind.value} -> completed in {dt}ms")
        return True
    except InvalidTransitionError as e:
        # finished by a concurrent or earlier run; leave the stored outcome alone
        log.warning(f"[worker] task_id={task_id} skipped: {e}")
        return False
    except Exception as e:
        log.error(f"[worker] task_id={task_id} failed: {type(e).__name__}: {e}\n{traceback.format_exc()}")
        _record_failure(store, task_id, e)
        return False


def run_tick(store: TaskStore, backends: Mapping[MediaKind, ChatMediaBackend], single: Optional[str] = None, max_n: int = 3) -> List[str]:
    """
    Process `single` if given, otherwise up to `max_n` pending jobs. Returns the ids handled.
    A job whose outcome could not be stored is pushed back on the queue; the rest of the batch continues.
    """
    ids = [single] if single else store.pop_pending(max_n=max_n)
    handled: List[str] = []
    for task_id in ids:
        if not task_id:
            continue
        try:
            process_task(store, task_id, backends)
        except Exception as e:
            log.error(f"[worker] task_id={task_id} crashed: {type(e).__name__}: {e}\n{traceback.format_exc()}")
            try:
                store.requeue(task_id)
            except Exception as requeue_err:
                log.error(f"[worker] task_id={task_id} requeue failed, job left as is: {requeue_err}")
            continue
        handled.append(task_id)
    return handled
