"""Tests for the face analysis endpoints."""
import pytest

from app.api.analysis import ANALYSIS_FAILED_MESSAGE
from app.core.exceptions import AttributeExtractionError, CatalogError
from app.infrastructure.database.repositories import FrameRepository

PHOTO = ("face.jpg", b"\xff\xd8\xff\xe0fake-jpeg", "image/jpeg")


@pytest.fixture
async def seeded(client):
    response = await client.post("/api/v1/frames/seed")
    return response.json()["frames"]


class TestAnalyzeFace:
    """POST /analysis/analyze-face and GET /analysis/{session_id}."""

    async def test_analyze_face(self, client, seeded, extractor):
        response = await client.post(
            "/api/v1/analysis/analyze-face",
            files={"photo": PHOTO},
            data={"session_id": "session-42"},
        )

        assert response.status_code == 200
        body = response.json()
        assert body["session_id"] == "session-42"
        assert body["analysis"]["face_shape"] == "oval"
        assert body["analysis"]["reasoning"] == "Balanced proportions"
        assert [frame["name"] for frame in body["recommended_frames"]][:2] == ["Classic Aviator", "Round Vintage"]
        assert extractor.calls == [(PHOTO[1], "image/jpeg")]

    async def test_analysis_can_be_fetched_by_session(self, client, seeded):
        await client.post(
            "/api/v1/analysis/analyze-face",
            files={"photo": PHOTO},
            data={"session_id": "session-7"},
        )

        response = await client.get("/api/v1/analysis/session-7")

        assert response.status_code == 200
        analysis = response.json()["analysis"]
        assert analysis["session_id"] == "session-7"
        assert analysis["recommended_styles"] == ["Aviator", "Round"]

    async def test_session_generated_when_missing(self, client, seeded):
        response = await client.post("/api/v1/analysis/analyze-face", files={"photo": PHOTO})

        assert response.status_code == 200
        session_id = response.json()["session_id"]
        assert (await client.get(f"/api/v1/analysis/{session_id}")).status_code == 200

    async def test_rejects_non_image(self, client, extractor):
        response = await client.post(
            "/api/v1/analysis/analyze-face",
            files={"photo": ("notes.txt", b"hello", "text/plain")},
        )

        assert response.status_code == 400
        assert response.json()["detail"] == "Only image files are allowed"
        assert extractor.calls == []

    async def test_rejects_oversized_image(self, client, monkeypatch):
        from app.core.config import settings

        monkeypatch.setattr(settings, "MAX_UPLOAD_BYTES", 4)

        response = await client.post("/api/v1/analysis/analyze-face", files={"photo": PHOTO})

        assert response.status_code == 413

    async def test_extraction_failure_is_500(self, client, extractor):
        extractor.error = AttributeExtractionError("Facial analysis failed")

        response = await client.post("/api/v1/analysis/analyze-face", files={"photo": PHOTO})

        assert response.status_code == 500
        assert response.json()["detail"] == ANALYSIS_FAILED_MESSAGE

    async def test_missing_photo_is_422(self, client):
        response = await client.post("/api/v1/analysis/analyze-face", data={"session_id": "s"})
        assert response.status_code == 422

    async def test_unknown_session_is_404(self, client):
        response = await client.get("/api/v1/analysis/nobody")
        assert response.status_code == 404

    async def test_analysis_kept_when_matching_fails(self, client, seeded, mocker):
        mocker.patch.object(
            FrameRepository,
            "fetch_active_catalog",
            side_effect=CatalogError("Failed to fetch active catalog"),
        )

        response = await client.post(
            "/api/v1/analysis/analyze-face",
            files={"photo": PHOTO},
            data={"session_id": "session-catalog-down"},
        )
        assert response.status_code == 500

        stored = await client.get("/api/v1/analysis/session-catalog-down")

        assert stored.status_code == 200
        assert stored.json()["analysis"]["face_shape"] == "oval"
