"""Tests for VisionService."""

import pytest
from pathlib import Path
from types import SimpleNamespace
from unittest.mock import Mock
import tempfile

from azure.core.exceptions import DeserializationError, HttpResponseError
from msrest.exceptions import ClientRequestError
from msrest.exceptions import DeserializationError as MsrestDeserializationError

# Add parent directory to path for imports
import sys
sys.path.insert(0, str(Path(__file__).parent.parent))

from image_service.exceptions import AnalysisError
from image_service.services.vision_service import (
    AnalysisResult,
    BoundingRectangle,
    VisionService,
)


def make_analysis(captions=(), tags=(), objects=()):
    """Build an object shaped like the SDK's ImageAnalysis model."""
    return SimpleNamespace(
        description=SimpleNamespace(
            captions=[SimpleNamespace(text=t, confidence=c) for t, c in captions]
        ),
        tags=[SimpleNamespace(name=n, confidence=c) for n, c in tags],
        objects=[
            SimpleNamespace(
                object_property=label,
                confidence=c,
                rectangle=SimpleNamespace(x=x, y=y, w=w, h=h),
            )
            for label, c, (x, y, w, h) in objects
        ],
    )


class TestVisionService:
    """Tests for VisionService class."""

    @pytest.fixture
    def temp_dir(self):
        """Create a temporary directory for tests."""
        with tempfile.TemporaryDirectory() as tmpdir:
            yield Path(tmpdir)

    @pytest.fixture
    def image_path(self, temp_dir):
        path = temp_dir / "photo.jpg"
        path.write_bytes(b"\xff\xd8fake")
        return path

    @pytest.fixture
    def client(self):
        return Mock()

    @pytest.fixture
    def service(self, client):
        return VisionService(
            endpoint="https://example.cognitiveservices.azure.com/",
            key="secret",
            client=client,
        )

    def test_analyze_image_builds_result(self, service, client, image_path):
        """Test conversion of the SDK response."""
        client.analyze_image_in_stream.return_value = make_analysis(
            captions=[("a dog on grass", 0.91)],
            tags=[("dog", 0.99), ("grass", 0.87)],
            objects=[("dog", 0.8, (10, 20, 30, 40))],
        )

        result = service.analyze_image(image_path)

        assert isinstance(result, AnalysisResult)
        assert [c.text for c in result.captions] == ["a dog on grass"]
        assert [t.name for t in result.tags] == ["dog", "grass"]
        assert result.objects[0].label == "dog"
        assert result.objects[0].confidence == 0.8
        assert result.objects[0].rectangle == BoundingRectangle(10, 20, 30, 40)

    def test_analyze_image_requests_three_features(self, service, client, image_path):
        """Test that description, tags and objects are requested."""
        client.analyze_image_in_stream.return_value = make_analysis()

        service.analyze_image(image_path)

        _, kwargs = client.analyze_image_in_stream.call_args
        features = [str(getattr(f, "value", f)) for f in kwargs["visual_features"]]
        assert features == ["Description", "Tags", "Objects"]

    def test_analyze_image_sends_stream(self, service, client, image_path):
        """Test that the image is sent as an open binary stream."""
        seen = {}

        def fake_analyze(stream, visual_features):
            seen["data"] = stream.read()
            return make_analysis()

        client.analyze_image_in_stream.side_effect = fake_analyze

        service.analyze_image(image_path)

        assert seen["data"] == b"\xff\xd8fake"

    def test_analyze_image_empty_response(self, service, client, image_path):
        """Test a response with no description and no lists."""
        client.analyze_image_in_stream.return_value = SimpleNamespace(
            description=None, tags=None, objects=None
        )

        result = service.analyze_image(image_path)

        assert result == AnalysisResult()

    def test_service_error_raises_analysis_error(self, service, client, image_path):
        """Test that SDK failures surface as AnalysisError."""
        client.analyze_image_in_stream.side_effect = ClientRequestError("quota exceeded")

        with pytest.raises(AnalysisError, match="quota exceeded"):
            service.analyze_image(image_path)

    @pytest.mark.parametrize(
        "error",
        [
            DeserializationError("bad body"),
            MsrestDeserializationError("bad body"),
            HttpResponseError(message="bad body"),
        ],
    )
    def test_malformed_response_raises_analysis_error(
        self, service, client, image_path, error
    ):
        """Test that response decoding failures surface as AnalysisError."""
        client.analyze_image_in_stream.side_effect = error

        with pytest.raises(AnalysisError, match="bad body"):
            service.analyze_image(image_path)

    def test_unreadable_file_raises_analysis_error(self, service, temp_dir):
        """Test that a vanished file surfaces as AnalysisError."""
        with pytest.raises(AnalysisError):
            service.analyze_image(temp_dir / "gone.jpg")

    def test_result_is_immutable(self):
        """Test that analysis results cannot be modified."""
        result = AnalysisResult()

        with pytest.raises(AttributeError):
            result.captions = ()

    def test_client_created_lazily(self):
        """Test that the SDK client is built on first use and reused."""
        service = VisionService(
            endpoint="https://example.cognitiveservices.azure.com/", key="secret"
        )

        assert service._client is None
        client = service.client
        assert service.client is client
