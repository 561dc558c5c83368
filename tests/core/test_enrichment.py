from __future__ import annotations

import threading
import time
from http import client as http_client

from conftest import FakeGenomeAdapter, genome, person
from teambuilder.core import CandidateEnricher, EnrichmentConfig
from teambuilder.schemas import RawCandidate


def raw(*usernames: str) -> list[RawCandidate]:
    return [RawCandidate.model_validate(person(name)) for name in usernames]


def test_enrich_merges_person_fields_and_strengths() -> None:
    adapter = FakeGenomeAdapter(
        {
            "amy": genome(
                ("python", "expert"),
                name="Amy Pond",
                picture="https://img.example/amy-full.png",
                location={"name": "Leadworth"},
            )
        }
    )

    [enriched] = CandidateEnricher(adapter).enrich(raw("amy"))

    assert enriched.username == "amy"
    assert enriched.name == "Amy Pond"
    assert enriched.picture == "https://img.example/amy-full.png"
    assert enriched.professional_headline == "amy headline"
    assert enriched.to_payload()["location"] == {"name": "Leadworth"}
    assert [(s.name, s.proficiency) for s in enriched.strengths] == [("python", "expert")]


def test_enrich_keeps_username_from_search_result() -> None:
    adapter = FakeGenomeAdapter({"amy": genome(username="someone-else")})

    [enriched] = CandidateEnricher(adapter).enrich(raw("amy"))

    assert enriched.username == "amy"


def test_failed_fetch_falls_back_to_empty_strengths() -> None:
    adapter = FakeGenomeAdapter({"bob": genome(("sql", "master"))})

    enriched = CandidateEnricher(adapter).enrich(raw("amy", "bob", "cat"))

    assert [c.username for c in enriched] == ["amy", "bob", "cat"]
    assert [len(c.strengths) for c in enriched] == [0, 1, 0]
    assert sorted(adapter.calls) == ["amy", "bob", "cat"]


def test_malformed_payloads_fall_back() -> None:
    adapter = FakeGenomeAdapter(
        {
            "amy": {"person": "not-a-dict", "strengths": []},
            "bob": {"person": {}, "strengths": {"name": "sql"}},
            "cat": {"person": {}, "strengths": [{"proficiency": "expert"}]},
            "dan": {"person": {}},
            "eve": ["not", "an", "object"],
        }
    )

    enriched = CandidateEnricher(adapter).enrich(raw("amy", "bob", "cat", "dan", "eve"))

    assert [c.username for c in enriched] == ["amy", "bob", "cat", "dan", "eve"]
    assert all(c.strengths == [] for c in enriched)


def test_fetches_run_concurrently() -> None:
    barrier = threading.Barrier(3, timeout=5)

    class BarrierAdapter:
        def fetch_genome(self, username: str):
            barrier.wait()
            return genome(("python", "novice"))

    enricher = CandidateEnricher(BarrierAdapter(), config=EnrichmentConfig(max_workers=3))

    enriched = enricher.enrich(raw("a", "b", "c"))

    assert [len(c.strengths) for c in enriched] == [1, 1, 1]


def test_worker_ceiling_bounds_in_flight_fetches() -> None:
    lock = threading.Lock()
    state = {"current": 0, "peak": 0}

    class SlowAdapter:
        def fetch_genome(self, username: str):
            with lock:
                state["current"] += 1
                state["peak"] = max(state["peak"], state["current"])
            time.sleep(0.02)
            with lock:
                state["current"] -= 1
            return genome()

    enricher = CandidateEnricher(SlowAdapter(), config=EnrichmentConfig(max_workers=2))

    enriched = enricher.enrich(raw("a", "b", "c", "d", "e", "f"))

    assert len(enriched) == 6
    assert state["peak"] <= 2


def test_cancelled_enrichment_issues_no_fetches() -> None:
    adapter = FakeGenomeAdapter({"amy": genome(("python", "expert"))})

    enriched = CandidateEnricher(adapter).enrich(raw("amy", "bob"), is_cancelled=lambda: True)

    assert adapter.calls == []
    assert [c.strengths for c in enriched] == [[], []]


def test_enrich_empty_list() -> None:
    assert CandidateEnricher(FakeGenomeAdapter()).enrich([]) == []


def test_unexpected_fetch_errors_fall_back_per_candidate() -> None:
    class FlakyAdapter:
        def fetch_genome(self, username: str):
            if username == "amy":
                raise http_client.IncompleteRead(b"{", 64)
            if username == "cat":
                raise RuntimeError("decoder exploded")
            return genome(("sql", "master"))

    enriched = CandidateEnricher(FlakyAdapter()).enrich(raw("amy", "bob", "cat"))

    assert [c.username for c in enriched] == ["amy", "bob", "cat"]
    assert [len(c.strengths) for c in enriched] == [0, 1, 0]


def test_fetches_stop_once_cancelled_mid_enrichment() -> None:
    cancelled = threading.Event()
    adapter = FakeGenomeAdapter({name: genome(("python", "expert")) for name in "abcdef"})
    original = adapter.fetch_genome

    def fetch_then_cancel(username: str):
        cancelled.set()
        return original(username)

    adapter.fetch_genome = fetch_then_cancel
    enricher = CandidateEnricher(adapter, config=EnrichmentConfig(max_workers=1))

    enriched = enricher.enrich(raw(*"abcdef"), is_cancelled=cancelled.is_set)

    assert adapter.calls == ["a"]
    assert [len(c.strengths) for c in enriched] == [1, 0, 0, 0, 0, 0]
