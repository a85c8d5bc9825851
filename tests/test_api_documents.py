from __future__ import annotations

from fastapi.testclient import TestClient


def create(client: TestClient, **payload) -> dict:
    res = client.post("/documents/", json=payload)
    assert res.status_code == 201
    return res.json()


def test_health(client: TestClient) -> None:
    res = client.get("/health")
    assert res.status_code == 200
    assert res.json()["status"] == "ok"


def test_create_and_get_document(client: TestClient) -> None:
    body = create(client, title="Plan")

    assert body["title"] == "Plan"
    assert body["wordCount"] == 1
    assert "createdAt" in body and "updatedAt" in body
    assert [b["type"] for b in body["content"]] == ["heading", "paragraph"]

    res = client.get(f"/documents/{body['id']}")
    assert res.status_code == 200
    assert res.json()["content"] == body["content"]


def test_missing_document_is_404(client: TestClient) -> None:
    assert client.get("/documents/missing").status_code == 404
    assert client.post("/documents/missing/blocks", json={}).status_code == 404


def test_create_from_unknown_template_is_422(client: TestClient) -> None:
    res = client.post("/documents/", json={"templateId": "nope"})
    assert res.status_code == 422


def test_list_templates(client: TestClient) -> None:
    res = client.get("/documents/templates")
    assert res.status_code == 200
    assert {t["id"] for t in res.json()} == {"meeting-notes", "project-proposal", "research-notes"}


def test_block_endpoints(client: TestClient) -> None:
    doc = create(client)
    doc_id = doc["id"]
    heading_id, paragraph_id = [b["id"] for b in doc["content"]]

    res = client.post(
        f"/documents/{doc_id}/blocks",
        json={"type": "bullet", "content": "a\nb", "afterBlockId": heading_id},
    )
    assert res.status_code == 201
    blocks = res.json()["content"]
    assert blocks[1]["type"] == "bullet-list"
    list_id = blocks[1]["id"]

    res = client.patch(f"/documents/{doc_id}/blocks/{paragraph_id}", json={"content": "Body"})
    assert res.status_code == 200
    assert res.json()["content"][2]["content"] == "Body"

    res = client.post(f"/documents/{doc_id}/blocks/{list_id}/convert", json={"action": "h2"})
    assert res.json()["content"][1]["level"] == 2

    res = client.post(f"/documents/{doc_id}/blocks/{list_id}/convert", json={"action": "image"})
    assert res.status_code == 422

    res = client.post(f"/documents/{doc_id}/blocks/{list_id}/move", json={"afterBlockId": paragraph_id})
    assert [b["id"] for b in res.json()["content"]] == [heading_id, paragraph_id, list_id]

    res = client.post(f"/documents/{doc_id}/blocks/{paragraph_id}/duplicate")
    assert len(res.json()["content"]) == 4

    res = client.post(f"/documents/{doc_id}/blocks/{paragraph_id}/autoformat", json={"text": "> Quote"})
    block = res.json()["content"][1]
    assert (block["id"], block["type"], block["content"]) == (paragraph_id, "quote", "Quote")

    res = client.delete(f"/documents/{doc_id}/blocks/{list_id}")
    assert list_id not in [b["id"] for b in res.json()["content"]]


def test_invalid_block_type_is_422(client: TestClient) -> None:
    doc = create(client)
    res = client.post(f"/documents/{doc['id']}/blocks", json={"type": "table"})
    assert res.status_code == 422


def test_update_document(client: TestClient) -> None:
    doc = create(client)
    res = client.put(
        f"/documents/{doc['id']}",
        json={
            "title": "Renamed",
            "isStarred": True,
            "content": [{"id": "x", "type": "heading", "content": "Only", "level": 9}],
        },
    )
    assert res.status_code == 200
    body = res.json()
    assert body["title"] == "Renamed"
    assert body["isStarred"] is True
    assert body["content"][0]["level"] == 3


def test_update_with_duplicate_block_ids_is_422(client: TestClient) -> None:
    doc = create(client)
    res = client.put(
        f"/documents/{doc['id']}",
        json={"content": [{"id": "x", "content": "a"}, {"id": "x", "content": "b"}]},
    )
    assert res.status_code == 422


def test_delete_document(client: TestClient) -> None:
    doc = create(client)

    assert client.delete(f"/documents/{doc['id']}").status_code == 204
    assert client.get(f"/documents/{doc['id']}").status_code == 404
    assert client.delete("/documents/never-existed").status_code == 204


def test_list_and_search(client: TestClient) -> None:
    create(client, title="Groceries")
    create(client, title="Work log")

    res = client.get("/documents/", params={"sort": "title"})
    assert res.status_code == 200
    assert [d["title"] for d in res.json()["documents"]] == ["Groceries", "Work log"]

    assert client.get("/documents/", params={"sort": "size"}).status_code == 422

    res = client.post("/documents/search", json={"query": "work"})
    body = res.json()
    assert body["totalFound"] == 1
    assert body["documents"][0]["title"] == "Work log"


def test_stats_and_export(client: TestClient) -> None:
    doc = create(client, title="Report")

    stats = client.get(f"/documents/{doc['id']}/stats").json()
    assert stats["wordCount"] == 1
    assert stats["blockCount"] == 2

    res = client.post(f"/documents/{doc['id']}/export", json={"format": "md"})
    assert res.status_code == 200
    assert res.json()["content"] == "# Report"
    assert res.json()["filename"] == "Report.md"

    res = client.post(f"/documents/{doc['id']}/export", json={"format": "pdf"})
    assert res.status_code == 422


def test_classify(client: TestClient) -> None:
    res = client.post("/documents/classify", json={"text": "# Title"})
    assert res.json() == {"type": "heading", "content": "Title", "level": 1}

    res = client.post("/documents/classify", json={"text": "1. step one"})
    assert res.json() == {"type": "numbered-list", "content": "step one", "level": None}
