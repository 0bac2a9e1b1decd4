import sys
from datetime import datetime, timedelta, timezone
from pathlib import Path

ROOT = Path(__file__).resolve().parents[1]
SRC = ROOT / "src"
if str(SRC) not in sys.path:
    sys.path.insert(0, str(SRC))


class FakeResponse:
    def __init__(self, status_code: int = 200, body=None):
        self.status_code = status_code
        self.body = body

    @property
    def ok(self) -> bool:
        return 200 <= self.status_code < 300

    def json(self):
        if self.body is None:
            raise ValueError("No JSON body")
        return self.body

    def raise_for_status(self):
        import requests

        if not self.ok:
            raise requests.HTTPError(f"HTTP {self.status_code}")


class FakeSession:
    """Records requests and answers them from a queue (or a single default)."""

    def __init__(self, *responses, default=None):
        self.responses = list(responses)
        self.default = default or FakeResponse(200, {})
        self.calls = []

    def request(self, method, url, **kwargs):
        self.calls.append((method, url, kwargs))
        if self.responses:
            r = self.responses.pop(0)
        else:
            r = self.default
        if isinstance(r, Exception):
            raise r
        return r


class FakeApi:
    """Stands in for ProductApiService at the service boundary."""

    def __init__(self, products=None, status_code: int = 201, body=None, load_error=None):
        self.products = list(products or [])
        self.status_code = status_code
        self.body = body
        self.load_error = load_error
        self.calls = []

    def list_products(self):
        self.calls.append(("list",))
        if self.load_error is not None:
            raise self.load_error
        return list(self.products)

    def create_product(self, payload):
        self.calls.append(("create", payload))
        return FakeResponse(self.status_code, self.body)

    def update_product(self, product_id, payload):
        self.calls.append(("update", product_id, payload))
        return FakeResponse(self.status_code, self.body)

    def delete_product(self, product_id):
        self.calls.append(("delete", product_id))
        return FakeResponse(self.status_code, self.body)


class StepClock:
    """Returns a new instant on every call, `step_ms` apart."""

    def __init__(self, start: datetime | None = None, step_ms: int = 5):
        self.current = start or datetime(2024, 3, 1, 12, 0, 0, tzinfo=timezone.utc)
        self.step = timedelta(milliseconds=step_ms)

    def __call__(self) -> datetime:
        now = self.current
        self.current = self.current + self.step
        return now
