"""
In-memory session store, patient entity and session registry tests.
"""

import asyncio
import re

import pytest

from carecopilot.adapters.session import InMemorySessionStore, SessionRegistry
from carecopilot.domain.entities import Patient
from carecopilot.domain.enums import Severity
from carecopilot.domain.errors import InvalidPatientDataError, PatientNotFoundError

from conftest import VISIT_TS, make_analysis

PATIENT_ID_RE = re.compile(r"^patient-\d+-[0-9a-z]{7}$")


def run(coro):
    return asyncio.run(coro)


def test_add_patient_becomes_active():
    async def scenario():
        store = InMemorySessionStore()
        first = await store.add_patient("Ruth", 82)
        second = await store.add_patient("Walter", 79)
        return store, first, second, await store.get_active()

    store, first, second, active = run(scenario())
    assert PATIENT_ID_RE.match(first.id)
    assert first.id != second.id
    assert active is second


def test_unknown_patient_is_not_found():
    store = InMemorySessionStore()
    with pytest.raises(PatientNotFoundError):
        run(store.get_patient("patient-0-missing"))
    with pytest.raises(PatientNotFoundError):
        run(store.set_active("patient-0-missing"))


def test_set_active_none_clears_selection():
    async def scenario():
        store = InMemorySessionStore()
        await store.add_patient("Ruth", 82)
        await store.set_active(None)
        return await store.get_active()

    assert run(scenario()) is None


def test_append_keeps_history_newest_first():
    async def scenario():
        store = InMemorySessionStore()
        patient = await store.add_patient("Ruth", 82)
        await store.append_analysis(patient.id, make_analysis(summary="first", timestamp=1))
        return await store.append_analysis(patient.id, make_analysis(summary="second", timestamp=2))

    patient = run(scenario())
    assert [a.structured_data.visit_summary for a in patient.analyses] == ["second", "first"]
    assert patient.latest_analysis.timestamp == 2


def test_concurrent_appends_are_all_kept():
    async def scenario():
        store = InMemorySessionStore()
        patient = await store.add_patient("Ruth", 82)
        await asyncio.gather(
            *(store.append_analysis(patient.id, make_analysis(timestamp=i)) for i in range(10))
        )
        return await store.get_patient(patient.id)

    assert run(scenario()).visit_count == 10


def test_snapshot_restores_into_new_store():
    async def scenario():
        store = InMemorySessionStore()
        patient = await store.add_patient("Ruth", 82)
        await store.append_analysis(
            patient.id, make_analysis(flags=[("Fall risk", "high", "Dizzy")], timestamp=VISIT_TS)
        )
        snapshot = await store.snapshot()

        restored = InMemorySessionStore()
        await restored.restore(snapshot)
        return snapshot, await restored.snapshot()

    original, restored = run(scenario())
    assert restored == original
    assert restored["patients"][0]["analyses"][0]["risks"]["risk_flags"][0]["severity"] == "high"


def test_restore_drops_legacy_demo_patient_and_repairs_active_id():
    state = {
        "patients": [
            {"id": "mary-thompson", "name": "Mary Thompson", "age": 84, "analyses": []},
            {
                "id": "patient-1-aaaaaaa",
                "name": "Ruth",
                "age": 82,
                "analyses": [
                    {
                        "cleanedTranscript": "t",
                        "structuredData": {"concerns": ["Tired"]},
                        "risks": {"risk_flags": [{"risk": "Edema", "severity": "moderate", "reason": ""}]},
                        "timestamp": VISIT_TS,
                    }
                ],
            },
        ],
        "activePatientId": "mary-thompson",
    }

    async def scenario():
        store = InMemorySessionStore()
        await store.restore(state)
        return await store.list_patients(), await store.get_active()

    patients, active = run(scenario())
    assert [p.id for p in patients] == ["patient-1-aaaaaaa"]
    assert active.id == "patient-1-aaaaaaa"
    assert patients[0].analyses[0].risk_flags[0].severity is Severity.MEDIUM


@pytest.mark.parametrize(
    "state",
    [
        None,
        "not a snapshot",
        {"patients": "nope"},
        {"patients": [{"name": "No id", "age": 3}]},
        {"patients": [{"id": "p1", "name": "", "age": 3}]},
        {"patients": [{"id": "p1", "name": "Ruth", "age": 3, "analyses": [{"timestamp": "x"}]}]},
        {"patients": [{"id": "p1", "name": "Ruth", "age": 3, "analyses": [{"timestamp": float("inf")}]}]},
        {"patients": [{"id": "p1", "name": "Ruth", "age": 3, "analyses": [{"timestamp": float("nan")}]}]},
        {"patients": [{"id": "p1", "name": "Ruth", "age": 3, "analyses": [{"timestamp": 1e300}]}]},
        {"patients": [{"id": "p1", "name": "Ruth", "age": 3, "analyses": [{"timestamp": 10**400}]}]},
        {"patients": [{"id": "p1", "name": "Ruth", "age": 3, "analyses": [{"timestamp": -1}]}]},
    ],
)
def test_malformed_snapshot_yields_empty_store(state):
    async def scenario():
        store = InMemorySessionStore()
        await store.add_patient("Existing", 70)
        await store.restore(state)
        return await store.snapshot()

    assert run(scenario()) == {"patients": [], "activePatientId": None}


def test_patient_validation():
    with pytest.raises(InvalidPatientDataError):
        Patient(id="p1", name="   ", age=80)
    with pytest.raises(InvalidPatientDataError):
        Patient(id="p1", name="Ruth", age=131)
    with pytest.raises(InvalidPatientDataError):
        Patient(id="p1", name="Ruth", age=True)
    with pytest.raises(InvalidPatientDataError):
        Patient(id="p1", name="x" * 121, age=80)
    assert Patient(id="p1", name="Ruth", age=0).visit_count == 0


def test_registry_isolates_sessions():
    registry = SessionRegistry()
    assert registry.get("a") is registry.get("a")
    assert registry.get("a") is not registry.get("b")
    assert len(registry) == 2
    registry.drop("a")
    assert len(registry) == 1


def test_latest_representable_timestamp_is_restored():
    from carecopilot.domain.entities.analysis import MAX_TIMESTAMP_MS

    async def scenario():
        store = InMemorySessionStore()
        await store.restore(
            {"patients": [{"id": "p1", "name": "Ruth", "age": 3, "analyses": [{"timestamp": MAX_TIMESTAMP_MS}]}]}
        )
        return await store.get_patient("p1")

    assert run(scenario()).latest_analysis.timestamp == MAX_TIMESTAMP_MS


class FakeClock:
    def __init__(self, now: float = 1000.0):
        self.now = now

    def __call__(self) -> float:
        return self.now


def test_registry_drops_idle_sessions():
    clock = FakeClock()
    registry = SessionRegistry(idle_ttl_seconds=60, clock=clock)
    first = registry.get("a")
    registry.get("b")

    clock.now += 45
    registry.get("a")
    clock.now += 30

    assert registry.evict_idle() == 1
    assert "a" in registry
    assert "b" not in registry
    assert registry.get("a") is first


def test_idle_session_comes_back_empty():
    async def scenario():
        clock = FakeClock()
        registry = SessionRegistry(idle_ttl_seconds=60, clock=clock)
        await registry.get("a").add_patient("Ruth", 82)
        clock.now += 61
        return await registry.get("a").list_patients()

    assert run(scenario()) == []


def test_registry_caps_session_count():
    clock = FakeClock()
    registry = SessionRegistry(max_sessions=3, clock=clock)
    for sid in ("a", "b", "c"):
        registry.get(sid)
        clock.now += 1
    registry.get("a")
    registry.get("d")

    assert len(registry) == 3
    assert "b" not in registry
    assert all(sid in registry for sid in ("a", "c", "d"))
