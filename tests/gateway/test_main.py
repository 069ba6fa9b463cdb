import pytest
from unittest.mock import patch, AsyncMock
from fastapi.testclient import TestClient

from agent.errors import ReplyGenerationError
from common.api_messages import ChatRequest, ChatResponse
from gateway.main import app


@pytest.fixture
def client():
    return TestClient(app)


def test_health_check(client):
    """
    Tests the /api/health endpoint to ensure the server is running and responsive.
    """
    response = client.get("/api/health")
    assert response.status_code == 200
    assert response.json() == {"status": "OK", "message": "Server is running"}


@patch("gateway.main.process_chat", new_callable=AsyncMock)
def test_chat_returns_reply_and_plan(mock_process_chat, client):
    mock_process_chat.return_value = ChatResponse(response="Hello!", app_plan="## 🎯 Key Features")

    response = client.post("/api/chat", json={
        "message": "I want a todo app",
        "conversationHistory": [{"role": "user", "content": "hi"}],
        "currentAppPlan": None,
    })

    assert response.status_code == 200
    assert response.json() == {"response": "Hello!", "appPlan": "## 🎯 Key Features"}
    request = mock_process_chat.await_args.args[0]
    assert isinstance(request, ChatRequest)
    assert request.message == "I want a todo app"
    assert request.conversation_history[0].content == "hi"


@patch("gateway.main.process_chat", new_callable=AsyncMock)
def test_chat_omits_missing_plan(mock_process_chat, client):
    mock_process_chat.return_value = ChatResponse(response="Hello!")

    response = client.post("/api/chat", json={"message": "hi"})

    assert response.status_code == 200
    assert response.json() == {"response": "Hello!"}


@pytest.mark.parametrize("body", [{}, {"message": ""}, {"message": None}])
def test_chat_without_message_is_400(client, body):
    response = client.post("/api/chat", json=body)
    assert response.status_code == 400
    assert response.json() == {"error": "Message is required"}


def test_chat_with_malformed_history_is_400(client):
    response = client.post("/api/chat", json={
        "message": "hi",
        "conversationHistory": [{"role": "robot", "content": "beep"}],
    })
    assert response.status_code == 400
    assert "error" in response.json()


@patch("gateway.main.process_chat", new_callable=AsyncMock)
def test_chat_failure_is_500(mock_process_chat, client):
    mock_process_chat.side_effect = ReplyGenerationError("upstream down")

    response = client.post("/api/chat", json={"message": "hi"})

    assert response.status_code == 500
    assert response.json() == {"error": "Internal server error"}


def test_cors_preflight_is_allowed(client):
    response = client.options(
        "/api/chat",
        headers={
            "Origin": "http://localhost:3000",
            "Access-Control-Request-Method": "POST",
        },
    )
    assert response.status_code == 200
    assert "access-control-allow-origin" in response.headers
