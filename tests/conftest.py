"""
Shared fixtures: a small emoji-data catalog, pair records, and a fake
HTTP session so no test touches the network.
"""
import json
import time
from collections import defaultdict, deque
from io import BytesIO
from types import SimpleNamespace

import pytest
from PIL import Image
from urllib3.connectionpool import HTTPConnectionPool
from urllib3.response import HTTPResponse
from urllib3.util import retry as urllib3_retry

from emojikitchen import request
from emojikitchen.emoji import load_catalog

EMOJI_RECORDS = [
    {
        "unified": "1F600",
        "name": "GRINNING FACE",
        "short_name": "grinning",
        "category": "Smileys & Emotion",
        "subcategory": "face-smiling",
        "sort_order": 1,
    },
    {
        "unified": "1F603",
        "name": "SMILING FACE WITH OPEN MOUTH",
        "short_name": "smiley",
        "category": "Smileys & Emotion",
        "subcategory": "face-smiling",
        "sort_order": 2,
    },
    {
        "unified": "1F44B",
        "name": "WAVING HAND SIGN",
        "short_name": "Wave",
        "category": "People & Body",
        "subcategory": "hand-fingers-open",
        "sort_order": 150,
        "skin_variations": {
            "1F3FB": {"unified": "1F44B-1F3FB"},
            "1F3FF": {"unified": "1F44B-1F3FF"},
        },
    },
    {
        "unified": "00A9-FE0F",
        "name": "COPYRIGHT SIGN",
        "short_name": "copyright",
        "category": "Symbols",
        "subcategory": "other-symbol",
        "sort_order": 1500,
    },
    {
        "unified": "00AE-FE0F",
        "name": "REGISTERED SIGN",
        "short_name": "registered",
        "category": "Symbols",
        "subcategory": "other-symbol",
        "sort_order": 1501,
    },
    {
        "unified": "1F3C1",
        "name": "CHEQUERED FLAG",
        "short_name": "checkered_flag",
        "category": "Flags",
        "subcategory": "flag",
        "sort_order": 65535,
    },
]

PAIR_LINES = [
    "5014/a9-fe0f/1f600",
    "3e9/1f603/1f603",
    "3e9/1f600/1f44b/",
    "4fb6/1f603/ae-fe0f",
    "3e9/1f3c1/1f3c1",
]


@pytest.fixture
def emoji_records():
    return json.loads(json.dumps(EMOJI_RECORDS))


@pytest.fixture
def catalog(emoji_records):
    return load_catalog(emoji_records)


@pytest.fixture
def emoji_data_file(tmp_path, emoji_records):
    path = tmp_path / "emoji.json"
    path.write_text(json.dumps(emoji_records), encoding="utf-8")
    return path


@pytest.fixture
def pairs_file(tmp_path):
    path = tmp_path / "pairs.txt"
    path.write_text("\n".join(PAIR_LINES) + "\n", encoding="utf-8")
    return path


def make_gif(frames=3, size=64) -> bytes:
    """An animated GIF whose frames all differ."""
    colors = [(255, 0, 0), (0, 255, 0), (0, 0, 255), (255, 255, 0)]
    images = [
        Image.new("RGB", (size, size), colors[i % len(colors)]) for i in range(frames)
    ]
    out = BytesIO()
    images[0].save(
        out, format="GIF", save_all=True, append_images=images[1:], duration=100, loop=0
    )
    return out.getvalue()


class FakeResponse:
    def __init__(self, status_code=200, content=b"", json_body=None):
        self.status_code = status_code
        self.content = content
        self._json = json_body

    @property
    def ok(self):
        return self.status_code < 400

    @property
    def text(self):
        return self.content.decode("utf-8", "replace")

    def json(self):
        if self._json is None:
            return json.loads(self.content)
        return self._json


class FakeSession:
    """
    Replays queued responses per URL. A queued exception is raised
    instead of returned. The last queued item repeats once the queue
    runs dry.
    """

    def __init__(self):
        self.responses = defaultdict(deque)
        self.calls = []

    def add(self, method, url, *responses):
        self.responses[(method, url)].extend(responses)

    def _next(self, method, url, **kwargs):
        self.calls.append((method, url, kwargs))
        queue = self.responses[(method, url)]
        if not queue:
            return FakeResponse(404)
        item = queue.popleft() if len(queue) > 1 else queue[0]
        if isinstance(item, Exception):
            raise item
        return item

    def get(self, url, **kwargs):
        return self._next("GET", url, **kwargs)

    def post(self, url, **kwargs):
        return self._next("POST", url, **kwargs)


@pytest.fixture
def http(monkeypatch):
    """Replace both request sessions with one FakeSession."""
    session = FakeSession()
    monkeypatch.setattr(request, "req_session", session)
    monkeypatch.setattr(request, "req_nocache_session", session)
    return session


class FakeTransport:
    """
    Replays queued (status, body) pairs or exceptions per URL in place of
    urllib3's connection, so the real sessions, adapters and retry policy
    run on top of it. The last queued item repeats once the queue runs dry.
    """

    def __init__(self):
        self.responses = defaultdict(deque)
        self.calls = []
        self.sleeps = []

    def add(self, url, *responses):
        self.responses[url].extend(responses)

    def make_request(self, pool, conn, method, url, **kwargs):
        full_url = f"{pool.scheme}://{pool.host}{url}"
        self.calls.append((method, full_url))
        queue = self.responses[full_url]
        item = (404, b"") if not queue else queue.popleft() if len(queue) > 1 else queue[0]
        if isinstance(item, Exception):
            raise item
        status, body = item
        return HTTPResponse(
            body=BytesIO(body),
            headers={"Content-Length": str(len(body))},
            status=status,
            preload_content=False,
            request_method=method,
            request_url=full_url,
        )


@pytest.fixture
def transport(monkeypatch):
    """Fake the network below the requests adapters and record backoff sleeps."""
    fake = FakeTransport()

    def make_request(pool, conn, method, url, **kwargs):
        return fake.make_request(pool, conn, method, url, **kwargs)

    for var in ["HTTP_PROXY", "HTTPS_PROXY", "ALL_PROXY", "http_proxy", "https_proxy", "all_proxy"]:
        monkeypatch.delenv(var, raising=False)
    monkeypatch.setattr(HTTPConnectionPool, "_make_request", make_request)
    monkeypatch.setattr(
        urllib3_retry,
        "time",
        SimpleNamespace(sleep=fake.sleeps.append, time=time.time, monotonic=time.monotonic),
    )
    return fake
