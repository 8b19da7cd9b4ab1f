"""Test utilities for roost applications.

``TestClient`` drives ``App.handle`` directly, no HTTP involved.
``recording_controller`` builds throwaway controller types that log
their activation, for checking registry ordering and fail-fast::

    log: list[str] = []
    a = recording_controller("A")(log)
    b = recording_controller("B", fail=RuntimeError("boom"))(log)
"""

from roost.app import App
from roost.http.request import Request
from roost.http.response import Response


class TestClient:
    """Synchronous test client.

    Starts the app on entry, exactly like the ASGI lifespan would::

        with TestClient(app) as client:
            response = client.get("/admin/plugins", user="admin")
            assert response.status == 200
    """

    __test__ = False  # Tell pytest this is not a test class
    __slots__ = ("app",)

    def __init__(self, app: App) -> None:
        self.app = app

    def __enter__(self) -> TestClient:
        self.app.start()
        return self

    def __exit__(self, *args: object) -> None:
        return None

    def get(
        self,
        path: str,
        *,
        user: str | None = None,
        headers: dict[str, str] | None = None,
    ) -> Response:
        """Send a GET request."""
        return self.request("GET", path, user=user, headers=headers)

    def request(
        self,
        method: str,
        path: str,
        *,
        user: str | None = None,
        headers: dict[str, str] | None = None,
    ) -> Response:
        lowered = {k.lower(): v for k, v in (headers or {}).items()}
        return self.app.handle(Request(method.upper(), path, headers=lowered, user=user))


class RecordingController:
    """Controller that appends its name to a shared log when activated.

    Pass *fail* to raise it from ``activate()`` instead, after logging.
    """

    fail: BaseException | None = None

    def __init__(self, log: list[str]) -> None:
        self.log = log
        self.activations = 0

    def activate(self) -> None:
        self.activations += 1
        self.log.append(type(self).__name__)
        if self.fail is not None:
            raise self.fail


def recording_controller(
    name: str,
    *,
    fail: BaseException | None = None,
) -> type[RecordingController]:
    """Create a distinct ``RecordingController`` subclass called *name*."""
    return type(name, (RecordingController,), {"fail": fail})
