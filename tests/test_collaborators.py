"""Tests for upload and vision reply parsing."""

import pytest

from vision_chat.collaborators import (
    VISION_MODEL,
    CollaboratorError,
    UploadError,
    VisionResponseError,
    build_vision_params,
    parse_upload_response,
    parse_vision_payload,
)


class TestParseUploadResponse:
    """Tests for parse_upload_response."""

    def test_returns_trimmed_url(self):
        """Test that surrounding whitespace is removed."""
        assert parse_upload_response("  https://files.example/abc.png\n") == (
            "https://files.example/abc.png"
        )

    def test_empty_reply_raises(self):
        """Test that an empty reply is a failure."""
        with pytest.raises(UploadError, match="Upload failed"):
            parse_upload_response("   ")

    def test_error_reply_raises(self):
        """Test that a reply mentioning an error is a failure."""
        with pytest.raises(UploadError):
            parse_upload_response("Error: file too large")

    def test_upload_error_is_value_error(self):
        """Test the exception hierarchy."""
        assert issubclass(UploadError, CollaboratorError)
        assert issubclass(CollaboratorError, ValueError)


class TestBuildVisionParams:
    """Tests for build_vision_params."""

    def test_default_model(self):
        """Test that the configured model is used by default."""
        params = build_vision_params("What is this?", "https://img/x.png")
        assert params == {
            "q": "What is this?",
            "image_url": "https://img/x.png",
            "model": VISION_MODEL,
        }

    def test_explicit_model(self):
        """Test overriding the model."""
        params = build_vision_params("Q", "https://img/x.png", model="other/model")
        assert params["model"] == "other/model"

    def test_blank_question_raises(self):
        """Test that a blank question is rejected."""
        with pytest.raises(ValueError, match="question"):
            build_vision_params("   ", "https://img/x.png")

    def test_missing_image_raises(self):
        """Test that a question without an image is rejected."""
        with pytest.raises(ValueError, match="image"):
            build_vision_params("What is this?", "")


class TestParseVisionPayload:
    """Tests for parse_vision_payload."""

    def test_returns_answer(self):
        """Test extracting the answer text."""
        payload = {"status": True, "BK9": "## Answer\nIt is a cat."}
        assert parse_vision_payload(payload) == "## Answer\nIt is a cat."

    @pytest.mark.parametrize(
        "payload",
        [None, [], "text", {}, {"status": False}, {"BK9": ""}, {"BK9": 12}],
    )
    def test_invalid_payloads_raise(self, payload):
        """Test that payloads without a usable answer are rejected."""
        with pytest.raises(VisionResponseError, match="Invalid response format"):
            parse_vision_payload(payload)
