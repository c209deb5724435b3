import logging

import pytest
from fastapi.testclient import TestClient

from src.tasky_api.main import create_app
from src.tasky_api.repositories import InMemoryRepository, build_repository


class RecordingRepository(InMemoryRepository):
    def __init__(self, fail_on=None):
        super().__init__()
        self.calls = []
        self.fail_on = fail_on

    async def connect(self):
        self.calls.append("connect")
        if self.fail_on == "connect":
            raise ConnectionError("database unreachable")

    async def ensure_indexes(self):
        self.calls.append("ensure_indexes")
        if self.fail_on == "ensure_indexes":
            raise RuntimeError("index creation failed")
        await super().ensure_indexes()

    async def close(self):
        self.calls.append("close")


class TestStartup:
    def test_connect_then_index_before_serving(self, settings_factory):
        repo = RecordingRepository()
        with TestClient(create_app(settings_factory(), repository=repo)) as client:
            assert repo.calls == ["connect", "ensure_indexes"]
            assert repo._indexes == ["createdAt"]
            assert client.get("/todos").status_code == 200
        assert repo.calls[-1] == "close"

    def test_connect_failure_aborts_startup(self, settings_factory):
        repo = RecordingRepository(fail_on="connect")
        with pytest.raises(ConnectionError):
            with TestClient(create_app(settings_factory(), repository=repo)):
                pass
        assert "ensure_indexes" not in repo.calls

    def test_index_failure_aborts_startup(self, settings_factory):
        repo = RecordingRepository(fail_on="ensure_indexes")
        with pytest.raises(RuntimeError, match="index creation failed"):
            with TestClient(create_app(settings_factory(), repository=repo)):
                pass
        assert repo.calls == ["connect", "ensure_indexes", "close"]

    def test_repository_is_built_from_settings_when_not_injected(self, settings_factory):
        app = create_app(settings_factory())
        with TestClient(app) as client:
            assert isinstance(app.state.repository, InMemoryRepository)
            assert client.get("/todos").json() == []

    def test_repository_build_failure_is_logged(self, settings_factory, monkeypatch, caplog):
        def broken_build(settings):
            raise ValueError("bad MONGO_URI")

        monkeypatch.setattr("src.tasky_api.main.build_repository", broken_build)
        with pytest.raises(ValueError, match="bad MONGO_URI"):
            with TestClient(create_app(settings_factory())):
                pass
        assert "Startup failed; refusing to accept traffic" in caplog.text

    def test_startup_log_does_not_claim_a_port(self, settings_factory, caplog):
        caplog.set_level(logging.INFO)
        with TestClient(create_app(settings_factory(log_level="INFO"), repository=InMemoryRepository())):
            pass
        assert "Startup complete" in caplog.text
        assert "Listening on" not in caplog.text


class TestBuildRepository:
    def test_memory_backend(self, settings_factory):
        assert isinstance(build_repository(settings_factory()), InMemoryRepository)

    def test_mongo_backend(self, settings_factory, monkeypatch):
        from src.tasky_api.db import MongoTodoRepository

        seen = {}

        def fake_from_uri(cls, uri, database_name):
            seen["args"] = (uri, database_name)
            return "mongo-repo"

        monkeypatch.setattr(MongoTodoRepository, "from_uri", classmethod(fake_from_uri))
        settings = settings_factory(
            persistence_backend="mongo",
            mongo_uri="mongodb://db.example:27017/tasky",
            mongo_db_name="tasky",
        )
        assert build_repository(settings) == "mongo-repo"
        assert seen["args"] == ("mongodb://db.example:27017/tasky", "tasky")
