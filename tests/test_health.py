"""
Tests for liveness and health endpoints.
"""


class TestHealth:
    """Tests for / and /health."""

    def test_liveness_is_plaintext(self, client):
        response = client.get("/")

        assert response.status_code == 200
        assert response.headers["content-type"].startswith("text/plain")
        assert response.text == "LinkedIn Outreach Gateway is running"

    def test_health(self, client):
        response = client.get("/health")

        assert response.status_code == 200
        body = response.json()
        assert body["status"] == "healthy"
        assert body["authStrategy"] == "unipile"
