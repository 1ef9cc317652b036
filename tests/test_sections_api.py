# tests/test_sections_api.py
import pytest

from services.errors import UpstreamEmptyResponseError

BODY = {
    "experimentLink": "http://example.org/bone",
    "experimentTitle": "Bone Loss in Microgravity",
    "experimentAuthors": "A. Smith",
}

BONE_DENSITY = (
    "## EXECUTIVE SUMMARY\n"
    "This study examined bone density.\n"
    "## KEY FINDINGS\n"
    "- Finding A\n"
    "- Finding B\n"
)


def test_executive_summary(client, gemini):
    r = client.post("/api/executive-summary", json=BODY)

    assert r.status_code == 200
    body = r.json()
    assert body["success"] is True
    assert body["section"] == "EXECUTIVE SUMMARY"
    assert body["data"] == "## EXECUTIVE SUMMARY\nSpaceflight reduced bone density in mice."
    assert gemini.calls == [(BODY["experimentLink"], BODY["experimentTitle"], BODY["experimentAuthors"])]


def test_key_findings_from_bone_density_text(client, gemini):
    gemini.text = BONE_DENSITY

    body = client.post("/api/key-findings", json=BODY).json()

    assert body["data"] == "## KEY FINDINGS\n- Finding A\n- Finding B"


def test_missing_section_is_404(client, gemini):
    gemini.text = BONE_DENSITY

    r = client.post("/api/biological-impacts", json=BODY)

    assert r.status_code == 404
    assert r.json() == {"success": False, "message": "Biological impacts not found"}


@pytest.mark.parametrize("slug", [
    "experiment-details",
    "practical-applications",
    "research-connections",
    "visual-insights",
    "future-research",
])
def test_every_section_route_exists(client, gemini, slug):
    gemini.text = "no headings at all"

    r = client.post(f"/api/{slug}", json=BODY)

    assert r.status_code == 404
    assert r.json()["success"] is False


def test_knowledge_graph_returns_structured_object(client):
    body = client.post("/api/knowledge-graph", json=BODY).json()

    assert body["section"] == "KNOWLEDGE GRAPH"
    assert body["data"]["summary"] == "Microgravity reduces bone density."
    assert [n["id"] for n in body["data"]["nodes"]] == ["microg", "bone"]
    assert body["data"]["edges"][0]["relationship"] == "REDUCES"


def test_section_routes_do_not_touch_the_cache(client, gemini):
    client.post("/api/executive-summary", json=BODY)
    client.post("/api/executive-summary", json=BODY)

    assert len(gemini.calls) == 2


def test_upstream_empty_response_is_500(client, gemini):
    gemini.error = UpstreamEmptyResponseError()

    r = client.post("/api/executive-summary", json=BODY)

    assert r.status_code == 500
    assert r.json()["success"] is False


def test_trailing_slash_route_answers_without_redirect(client):
    r = client.post("/api/executive-summary/", json=BODY, follow_redirects=False)

    assert r.status_code == 200
    assert r.json()["section"] == "EXECUTIVE SUMMARY"


def test_knowledge_graph_with_numeric_ids_is_still_an_object(client, gemini):
    gemini.text = (
        "## KNOWLEDGE GRAPH\n"
        "```json\n"
        '{"nodes": [{"id": 1, "label": "Microgravity", "group": 3}, {"id": 2, "type": null}],'
        ' "edges": [{"source": 1, "target": 2, "weight": 0.9}]}\n'
        "```\n"
    )

    data = client.post("/api/knowledge-graph", json=BODY).json()["data"]

    assert isinstance(data, dict)
    assert data["nodes"][0] == {"id": "1", "label": "Microgravity", "type": "", "group": 3}
    assert data["edges"][0]["weight"] == 0.9
