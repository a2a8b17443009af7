"""Shared test fixtures for vpassport."""

import copy
import json

import httpx
import pytest

SEALED_VIN = "WDD2040082R088866"
DRAFT_VIN = "WBA8E9G50GNT12345"

SEALED_RECORD = {
    "vin": SEALED_VIN,
    "updatedAt": "2025-03-01T12:00:00Z",
    "draft": None,
    "sealed": {
        "vin": SEALED_VIN,
        "lot_id": "LOT-14",
        "dekra": {
            "url": "https://reports.dekra.example/r/88866",
            "inspection_ts": "2025-02-28T09:00:00Z",
            "site": "Midrand",
        },
        "odometer": {"km": 84210},
        "tyres_mm": {"fl": 6.5, "fr": 6.4, "rl": 5.0, "rr": 5.1},
        "dtc": {
            "status": "amber",
            "codes": [
                {"code": "p0301"},
                {"code": "P0420", "desc": None},
                {"code": "bogus"},
            ],
        },
        "provenance": {
            "ts": "2025-02-28T08:30:00Z",
            "site": "Midrand",
            "captured_by": "inspector-7",
        },
        "ev": {
            "isElectric": True,
            "batteryCapacityKwh": 80,
            "smartcarCompatible": True,
            "batteryHealth": {
                "soh_pct": 92,
                "soc_pct": 55,
                "rangeKm": 310,
                "chargingStatus": "idle",
            },
        },
        "timeline": [
            {"ts": "2025-02-27T08:00:00Z", "title": "Vehicle received", "note": "Yard A"},
        ],
        "auction": {
            "openAt": "2025-03-02T10:00:00Z",
            "closeAt": "2025-03-02T18:00:00Z",
            "reserveMet": True,
            "currentBid": 179000,
            "bids": 12,
        },
        "seal": {
            "hash": "9f86d081884c7d659a2feaa0c55ad015a3bf4f1b2b0b822cd15d6c15b0f00a08",
            "sig": "MEUCIQDsig",
            "key_id": "passport-key-2025",
            "sealed_ts": "2025-03-01T11:00:00Z",
        },
    },
}

DRAFT_RECORD = {
    "vin": DRAFT_VIN,
    "updatedAt": "2025-03-01T12:00:00Z",
    "draft": {
        "vin": DRAFT_VIN,
        "lot_id": "LOT-22",
        "tyres_mm": {"fl": 3.0, "fr": 3.1, "rl": None, "rr": None},
        "dtc": {"status": "green", "codes": []},
        "timeline": [],
    },
    "sealed": None,
}


@pytest.fixture(autouse=True)
def isolated_env(tmp_path, monkeypatch):
    """Keep tests away from the real config dir and real overrides."""
    monkeypatch.setenv("XDG_CONFIG_HOME", str(tmp_path / "xdg"))
    monkeypatch.delenv("VPASSPORT_API_BASE_URL", raising=False)
    monkeypatch.delenv("VPASSPORT_API_KEY", raising=False)
    monkeypatch.delenv("VPASSPORT_LOG_LEVEL", raising=False)


@pytest.fixture
def temp_config_dir(tmp_path):
    """Provide isolated config directory for tests."""
    config_dir = tmp_path / ".config" / "vpassport"
    config_dir.mkdir(parents=True)
    return config_dir


@pytest.fixture
def mock_keyring(monkeypatch):
    """Mock keyring for API key tests."""
    storage = {}

    def mock_get(service, key):
        return storage.get(f"{service}:{key}")

    def mock_set(service, key, value):
        storage[f"{service}:{key}"] = value

    def mock_delete(service, key):
        k = f"{service}:{key}"
        if k not in storage:
            from keyring.errors import PasswordDeleteError
            raise PasswordDeleteError(f"No password for {key}")
        storage.pop(k)

    monkeypatch.setattr("keyring.get_password", mock_get)
    monkeypatch.setattr("keyring.set_password", mock_set)
    monkeypatch.setattr("keyring.delete_password", mock_delete)

    return storage


@pytest.fixture
def sealed_record():
    return copy.deepcopy(SEALED_RECORD)


@pytest.fixture
def draft_record():
    return copy.deepcopy(DRAFT_RECORD)


class FakeBackend:
    """In-memory passport backend served through httpx.MockTransport."""

    def __init__(self, records=None, verify=None):
        self.records = records or {}
        self.verify = verify or {}
        self.requests: list[httpx.Request] = []

    def handler(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        path = request.url.path

        if path.startswith("/passports/"):
            vin = path.rsplit("/", 1)[-1]
            if vin not in self.records:
                return httpx.Response(404, json={"error": "not_found"})
            return httpx.Response(200, json=self.records[vin])

        if path == "/verify":
            vin = request.url.params.get("vin")
            result = self.verify.get(vin, {"valid": True, "reasons": []})
            if isinstance(result, int):
                return httpx.Response(result, text="verifier down")
            return httpx.Response(200, content=json.dumps(result))

        return httpx.Response(404)

    def client(self) -> httpx.AsyncClient:
        return httpx.AsyncClient(transport=httpx.MockTransport(self.handler))


@pytest.fixture
def backend(sealed_record, draft_record):
    """Fake backend holding one sealed and one draft-only passport."""
    return FakeBackend(records={SEALED_VIN: sealed_record, DRAFT_VIN: draft_record})
