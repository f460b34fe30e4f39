"""Tests for engine creation and the user store schema."""

import threading
import time
from concurrent.futures import ThreadPoolExecutor

from sqlalchemy import inspect

from scribeai import database


class TestGetEngine:
    def test_engine_is_cached_per_url(self, tmp_path):
        url = f"sqlite:///{tmp_path / 'cached.db'}"
        assert database.get_engine(url) is database.get_engine(url)

    def test_creates_users_table(self, tmp_path):
        engine = database.get_engine(f"sqlite:///{tmp_path / 'schema.db'}")
        assert "users" in inspect(engine).get_table_names()

    def test_concurrent_first_use_creates_one_engine(self, tmp_path, monkeypatch):
        real_create_engine = database.create_engine
        created = []
        guard = threading.Lock()

        def slow_create_engine(*args, **kwargs):
            with guard:
                created.append(args[0])
            time.sleep(0.05)
            return real_create_engine(*args, **kwargs)

        monkeypatch.setattr(database, "create_engine", slow_create_engine)
        url = f"sqlite:///{tmp_path / 'race.db'}"

        with ThreadPoolExecutor(max_workers=8) as pool:
            engines = list(pool.map(lambda _: database.get_engine(url), range(8)))

        assert created == [url]
        assert all(engine is engines[0] for engine in engines)
