"""Tests for the standalone question generation endpoint."""

from fastapi.testclient import TestClient

from prompt_refiner_api.providers.base import QuestionGenerationError
from tests.fakes import FakeProvider, make_raw_questions

URL = "/api/v1/questions/generate"
PROMPT = "Explain how vaccines train the immune system"


class TestGenerateQuestions:
    def test_generate_questions(self, client: TestClient, fake_provider: FakeProvider) -> None:
        """Test generated questions are returned without creating a session."""
        fake_provider.question_batches = [make_raw_questions(5)]

        response = client.post(
            URL, json={"prompt": PROMPT, "llmProvider": "fake", "maxQuestions": 4}
        )

        assert response.status_code == 200
        data = response.json()
        assert data["totalGenerated"] == 4
        assert len(data["questions"]) == 4
        assert data["prompt"] == PROMPT
        assert data["llmProvider"] == "fake"
        assert fake_provider.generate_calls[0].max_questions == 4
        assert client.get("/api/v1/prompts/stats").json()["totalSessions"] == 0

    def test_default_limit_is_the_configured_ceiling(
        self, client: TestClient, fake_provider: FakeProvider
    ) -> None:
        client.post(URL, json={"prompt": PROMPT, "llmProvider": "fake"})

        assert fake_provider.generate_calls[0].max_questions == 10

    def test_max_questions_above_fifteen_is_rejected(self, client: TestClient) -> None:
        response = client.post(
            URL, json={"prompt": PROMPT, "llmProvider": "fake", "maxQuestions": 16}
        )

        assert response.status_code == 400
        assert response.json()["detail"]["code"] == "VALIDATION_ERROR"

    def test_max_questions_below_one_is_rejected(self, client: TestClient) -> None:
        response = client.post(
            URL, json={"prompt": PROMPT, "llmProvider": "fake", "maxQuestions": 0}
        )

        assert response.status_code == 400

    def test_prompt_too_short(self, client: TestClient) -> None:
        response = client.post(URL, json={"prompt": "too short", "llmProvider": "fake"})

        assert response.status_code == 400

    def test_unavailable_provider(self, client: TestClient) -> None:
        response = client.post(URL, json={"prompt": PROMPT, "llmProvider": "openai"})

        assert response.status_code == 400
        assert response.json()["detail"]["code"] == "PROVIDER_UNAVAILABLE"

    def test_vendor_failure(self, client: TestClient, fake_provider: FakeProvider) -> None:
        fake_provider.generation_error = QuestionGenerationError(
            "Authentication failed for Fake fake. Please check your API key.",
            provider="fake",
            model="fake-small",
        )

        response = client.post(URL, json={"prompt": PROMPT, "llmProvider": "fake"})

        assert response.status_code == 502
        detail = response.json()["detail"]
        assert detail["code"] == "QUESTION_GENERATION_ERROR"
        assert "API key" in detail["message"]
