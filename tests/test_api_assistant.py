from __future__ import annotations

from fastapi.testclient import TestClient


def test_quick_actions_listed(client: TestClient) -> None:
    res = client.get("/assistant/actions")
    assert res.status_code == 200
    assert "summarize" in [a["action"] for a in res.json()]


def test_ask(client: TestClient) -> None:
    res = client.post("/assistant/ask", json={"query": "Make it better", "selectedText": "text"})
    assert res.status_code == 200
    body = res.json()
    assert body["prompt"] == "Make it better"
    assert body["selectedText"] == "text"
    assert body["actions"]


def test_ask_rejects_blank_query(client: TestClient) -> None:
    assert client.post("/assistant/ask", json={"query": ""}).status_code == 422
    assert client.post("/assistant/ask", json={"query": "   "}).status_code == 422


def test_quick_action(client: TestClient) -> None:
    res = client.post("/assistant/actions/explain", json={"selectedText": "entropy"})
    assert res.status_code == 200
    assert res.json()["prompt"] == 'Explain this: "entropy"'
