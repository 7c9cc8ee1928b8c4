"""
Tests for URL validation and normalization.

Run with:
    pytest tests/test_url_normalizer.py -v
"""

import pytest

from yt2mp3.core.exceptions import InvalidReferenceError
from yt2mp3.services.url_normalizer import (
    extract_video_id,
    is_valid_reference,
    normalize_reference,
)

VIDEO_ID = "dQw4w9WgXcQ"
CANONICAL = f"https://www.youtube.com/watch?v={VIDEO_ID}"

ACCEPTED_SHAPES = [
    f"https://www.youtube.com/watch?v={VIDEO_ID}",
    f"https://youtu.be/{VIDEO_ID}",
    f"https://www.youtube.com/shorts/{VIDEO_ID}",
    f"https://www.youtube.com/embed/{VIDEO_ID}",
    f"https://music.youtube.com/watch?v={VIDEO_ID}",
]


# =============================================================================
# VALIDATION
# =============================================================================

class TestValidation:
    """Which inputs count as YouTube URLs"""

    @pytest.mark.parametrize("url", ACCEPTED_SHAPES)
    def test_accepted_shapes(self, url):
        assert is_valid_reference(url)

    @pytest.mark.parametrize("url", [
        f"youtube.com/watch?v={VIDEO_ID}",
        f"www.youtube.com/watch?v={VIDEO_ID}",
        f"http://youtu.be/{VIDEO_ID}",
        f"  https://youtu.be/{VIDEO_ID}  ",
    ])
    def test_optional_scheme_www_and_whitespace(self, url):
        assert is_valid_reference(url)

    @pytest.mark.parametrize("url", [
        "https://example.com/video",
        "https://vimeo.com/123456",
        f"https://m.youtube.com/watch?v={VIDEO_ID}",
        f"https://www.youtube.com/playlist?list={VIDEO_ID}",
        f"ftp://youtube.com/watch?v={VIDEO_ID}",
        f"see https://youtu.be/{VIDEO_ID}",
        "",
        "   ",
    ])
    def test_rejected_strings(self, url):
        assert not is_valid_reference(url)

    @pytest.mark.parametrize("value", [None, 42, ["https://youtu.be/x"], {"url": "x"}])
    def test_non_strings_rejected(self, value):
        assert not is_valid_reference(value)

    def test_normalize_raises_on_rejected(self):
        with pytest.raises(InvalidReferenceError) as exc_info:
            normalize_reference("https://example.com/video")

        assert exc_info.value.status_code == 400
        assert exc_info.value.message == "Invalid YouTube URL."
        assert exc_info.value.reference == "https://example.com/video"


# =============================================================================
# NORMALIZATION
# =============================================================================

class TestNormalization:
    """Canonical URL output"""

    @pytest.mark.parametrize("url", ACCEPTED_SHAPES)
    def test_every_shape_yields_same_id(self, url):
        assert extract_video_id(url) == VIDEO_ID
        assert normalize_reference(url) == CANONICAL

    def test_strips_playlist_and_tracking_params(self):
        url = f"https://www.youtube.com/watch?v={VIDEO_ID}&list=PL123&index=4&si=abc"
        assert normalize_reference(url) == CANONICAL

    def test_short_link_with_query(self):
        assert normalize_reference(f"https://youtu.be/{VIDEO_ID}?si=tracking") == CANONICAL

    def test_v_param_must_lead_query(self):
        url = f"https://www.youtube.com/watch?feature=share&v={VIDEO_ID}"
        with pytest.raises(InvalidReferenceError):
            normalize_reference(url)

    def test_later_pattern_overrides_earlier(self):
        # short-link ID is overridden by the v= parameter
        url = f"https://youtu.be/AAAAAAAAAAA?v={VIDEO_ID}"
        assert extract_video_id(url) == VIDEO_ID

    def test_id_alphabet(self):
        url = "https://youtu.be/a-B_c9D-e_F"
        assert normalize_reference(url) == "https://www.youtube.com/watch?v=a-B_c9D-e_F"


# =============================================================================
# PASS-THROUGH FALLBACK
# =============================================================================

class TestPassThrough:
    """Accepted URLs with no extractable ID are returned trimmed, not rejected"""

    @pytest.mark.parametrize("url", [
        "https://youtu.be/short",
        "https://www.youtube.com/watch?v=abc",
        "https://www.youtube.com/shorts/",
        "https://www.youtube.com/embed/tooShort",
    ])
    def test_returns_trimmed_input(self, url):
        assert extract_video_id(url) is None
        assert normalize_reference(f"  {url}\n") == url
