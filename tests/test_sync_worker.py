import json

from models.session_models import Snapshot
from services.errors import RemotePersistenceError
from services.sync_service import RemoteSaveQueue
from utils.sync_worker import LoadWorkerThread, SyncWorkerThread


class ScriptedRemote:
    """版番号ごとに成功・失敗を決めておくリモートアダプタ。"""

    def __init__(self, fail_versions=()):
        self.fail_versions = set(fail_versions)
        self.last_pushed_version = None

    def save_data(self, data):
        if data.version in self.fail_versions:
            raise RemotePersistenceError("conflict", 409)
        self.last_pushed_version = data.version + 1


class StubLoader:
    def __init__(self, result=None, error=None):
        self.result = result
        self.error = error

    def load_data(self):
        if self.error is not None:
            raise self.error
        return self.result


def _run_sync(queue):
    worker = SyncWorkerThread(queue)
    succeeded, failed = [], []
    worker.sync_succeeded.connect(succeeded.append)
    worker.error_occurred.connect(failed.append)
    worker.run()
    return succeeded, failed


def test_sync_worker_reports_pushed_version():
    queue = RemoteSaveQueue(ScriptedRemote())
    queue.submit(Snapshot(version=6))

    succeeded, failed = _run_sync(queue)

    assert succeeded == [7]
    assert failed == []


def test_sync_worker_reports_failure_only():
    queue = RemoteSaveQueue(ScriptedRemote(fail_versions={6}))
    queue.submit(Snapshot(version=6))

    succeeded, failed = _run_sync(queue)

    assert succeeded == []
    assert len(failed) == 1
    assert "conflict" in failed[0]


def test_sync_worker_reports_success_after_earlier_failure():
    remote = ScriptedRemote(fail_versions={1})
    remote.last_pushed_version = 4
    queue = RemoteSaveQueue(remote)
    queue.submit(Snapshot(version=4))
    queue.drain()
    queue.submit(Snapshot(version=1))
    queue.drain()
    assert queue.last_push_succeeded is False

    queue.submit(Snapshot(version=5))
    succeeded, failed = _run_sync(queue)

    assert succeeded == [6]
    assert failed == []


def test_load_worker_emits_snapshot():
    snapshot = Snapshot(version=3)
    worker = LoadWorkerThread(StubLoader(result=snapshot))
    loaded, failed = [], []
    worker.data_loaded.connect(loaded.append)
    worker.error_occurred.connect(failed.append)
    worker.run()

    assert loaded == [snapshot]
    assert failed == []


def test_load_worker_reports_corrupted_local_data():
    worker = LoadWorkerThread(StubLoader(error=json.JSONDecodeError("broken", "{", 0)))
    loaded, failed = [], []
    worker.data_loaded.connect(loaded.append)
    worker.error_occurred.connect(failed.append)
    worker.run()

    assert loaded == []
    assert len(failed) == 1
