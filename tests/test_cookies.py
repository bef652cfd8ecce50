import json
import threading
from datetime import datetime, timedelta, timezone

from bixo.core.cookies import CookieStore


def test_set_and_get_in_memory():
    store = CookieStore()
    store.set("accessToken", "abc", expires=timedelta(hours=1))
    assert store.get("accessToken") == "abc"
    assert store.get("missing") is None


def test_expired_cookie_reads_as_absent():
    store = CookieStore()
    store.set("accessToken", "abc", expires=datetime.now(timezone.utc) - timedelta(seconds=1))
    assert store.get("accessToken") is None
    assert store.names() == []


def test_naive_expiry_is_utc():
    store = CookieStore()
    cookie = store.set("accessToken", "abc", expires=datetime(2030, 1, 1))
    assert cookie.expires == datetime(2030, 1, 1, tzinfo=timezone.utc)


def test_cookies_are_scoped_by_path():
    store = CookieStore()
    store.set("accessToken", "root", expires=timedelta(hours=1), path="/")
    store.set("accessToken", "admin", expires=timedelta(hours=1), path="/admin")

    assert store.get("accessToken") == "root"
    assert store.get("accessToken", "/admin") == "admin"
    store.remove("accessToken", "/admin")
    assert store.get("accessToken") == "root"


def test_persists_to_json(tmp_path):
    path = tmp_path / "nested" / "session.json"
    store = CookieStore(path)
    store.set("refreshToken", "r-1", expires=timedelta(days=7), same_site="Strict")

    raw = json.loads(path.read_text(encoding="utf-8"))
    assert raw["cookies"][0]["name"] == "refreshToken"
    assert raw["cookies"][0]["same_site"] == "Strict"

    reloaded = CookieStore(path)
    assert reloaded.get("refreshToken") == "r-1"
    assert reloaded.get_cookie("refreshToken").same_site == "Strict"


def test_corrupt_file_starts_empty(tmp_path):
    path = tmp_path / "session.json"
    path.write_text("{not json", encoding="utf-8")

    store = CookieStore(path)

    assert store.get("accessToken") is None
    store.set("accessToken", "abc", expires=timedelta(hours=1))
    assert CookieStore(path).get("accessToken") == "abc"


def test_file_deleted_elsewhere(tmp_path):
    path = tmp_path / "session.json"
    store = CookieStore(path)
    store.set("accessToken", "abc", expires=timedelta(hours=1))

    path.unlink()

    assert store.get("accessToken") is None


def test_stores_sharing_a_file_keep_each_others_cookies(tmp_path):
    path = tmp_path / "session.json"
    CookieStore(path).set("refreshToken", "r-1", expires=timedelta(days=7))
    misses = []

    def write(store, n):
        for i in range(200):
            store.set("accessToken", f"a-{n}-{i}", expires=timedelta(hours=1))

    def read(store):
        for _ in range(200):
            if store.get("refreshToken") != "r-1":
                misses.append(1)

    threads = [threading.Thread(target=write, args=(CookieStore(path), n)) for n in range(2)]
    threads += [threading.Thread(target=read, args=(CookieStore(path),)) for _ in range(2)]
    for t in threads:
        t.start()
    for t in threads:
        t.join()

    assert misses == []
    assert CookieStore(path).get("refreshToken") == "r-1"
    assert CookieStore(path).get("accessToken").startswith("a-")
    assert [p.name for p in tmp_path.iterdir()] == ["session.json"]
