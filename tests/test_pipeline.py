"""
End-to-end resolution: raw database values in, canonical URLs out.
"""

import json

import pytest
from hypothesis import given, strategies as st

from mediaref.config import MediaConfig
from mediaref.media import resolve, resolve_post_cover, resolve_url
from mediaref.media.pipeline import clean_reference, stringify_input

BASE = "https://proj.supabase.co/storage/v1/object/public"
FALLBACK = "/assets/images/default-banner.jpg"
UUID = "3fa85f64-5717-4562-b3fc-2c963f66afa6"
SUPABASE_URL = f"{BASE}/post-media/x.jpg"

REFERENCES = [
    "https://x.test/a.jpg",
    SUPABASE_URL,
    "cover-images/u1/a.jpg",
    "avatars/u1/pic.jpg",
    "post-media/u1/a.png",
    f"{UUID}/a.jpg",
    "/assets/images/a.jpg",
    "./assets/images/a.jpg",
    "//cdn.test/img.png",
]

# Encodings seen in stored cover_images values
WRAPPERS = [
    lambda s: f"[{s}]",
    lambda s: f'"{s}"',
    lambda s: f"'{s}'",
    lambda s: f"%5B{s}%5D",
    lambda s: f"%22{s}%22",
    lambda s: f'\\"{s}\\"',
    lambda s: f" {s} ,",
    lambda s: json.dumps([s]),
    lambda s: json.dumps(s),
]


@st.composite
def corrupted_references(draw):
    base = draw(st.sampled_from(REFERENCES))
    raw = base
    for wrap in draw(st.lists(st.sampled_from(WRAPPERS), max_size=5)):
        raw = wrap(raw)
    return base, raw


class TestResolveExamples:

    def test_json_array_unwrap(self):
        assert resolve('["https://x.test/a.jpg"]').url == "https://x.test/a.jpg"

    def test_object_unwrap(self):
        assert resolve('{"url":"https://x.test/a.jpg"}').url == "https://x.test/a.jpg"

    def test_array_of_objects_unwrap(self):
        assert resolve('[{"url":"avatars/u1/a.jpg"}]').url == f"{BASE}/avatars/u1/a.jpg"

    def test_bucket_routing(self):
        result = resolve("cover-images/u1/a.jpg")
        assert result.url == f"{BASE}/cover-images/u1/a.jpg"
        assert result.source == "supabase"
        assert result.is_valid

    def test_uuid_prefixed_default_bucket(self):
        result = resolve(f"{UUID}/a.jpg")
        assert result.url == f"{BASE}/cover-images/{UUID}/a.jpg"
        assert result.source == "supabase"

    def test_supabase_url_passthrough(self):
        result = resolve(SUPABASE_URL)
        assert result.url == SUPABASE_URL
        assert result.source == "supabase"

    def test_bracketed_supabase_url(self):
        result = resolve(f"[{SUPABASE_URL}]")
        assert result.url == SUPABASE_URL
        assert result.source == "supabase"
        assert result.original_input == f"[{SUPABASE_URL}]"

    def test_local_path_passthrough(self):
        result = resolve("/assets/images/a.jpg")
        assert result.url == "/assets/images/a.jpg"
        assert result.source == "local"

    def test_external_url(self):
        result = resolve("https://x.test/a.jpg")
        assert result.source == "external"
        assert result.is_valid

    def test_protocol_relative(self):
        assert resolve("//cdn.test/img.png").url == "https://cdn.test/img.png"

    def test_doubly_encoded(self):
        raw = json.dumps(json.dumps(["cover-images/u1/a.jpg"]))
        assert resolve(raw).url == f"{BASE}/cover-images/u1/a.jpg"

    def test_escaped_array(self):
        assert resolve('[\\"https://x.test/a.jpg\\"]').url == "https://x.test/a.jpg"


class TestFallback:

    def test_none(self):
        result = resolve(None)
        assert result.url == FALLBACK
        assert result.source == "fallback"
        assert result.is_valid is False
        assert result.original_input == "None"

    @pytest.mark.parametrize("raw", ["", "   ", "[]", '[""]', "{}", "a.jpg", "not a url"])
    def test_unresolvable_strings(self, raw):
        result = resolve(raw)
        assert result.url == FALLBACK
        assert result.source == "fallback"
        assert not result.is_valid

    @pytest.mark.parametrize("raw", [42, 3.5, {"url": "https://x.test/a.jpg"}, object(), [], [None], [""], [1]])
    def test_unsupported_shapes(self, raw):
        assert resolve(raw).source == "fallback"

    def test_custom_fallback(self):
        result = resolve("nonsense", "/assets/images/avatar.png")
        assert result.url == "/assets/images/avatar.png"
        assert not result.is_valid

    def test_custom_config(self):
        config = MediaConfig(storage_base="https://other.supabase.co/storage/v1/object/public/",
                             fallback_url="/assets/x.jpg")
        assert resolve(None, config=config).url == "/assets/x.jpg"
        assert resolve("avatars/a.jpg", config=config).url == \
            "https://other.supabase.co/storage/v1/object/public/avatars/a.jpg"

    def test_internal_errors_degrade_to_fallback(self, monkeypatch):
        def boom(text):
            raise RuntimeError("boom")

        monkeypatch.setattr("mediaref.media.pipeline.classify", boom)
        result = resolve("avatars/a.jpg")
        assert result.url == FALLBACK
        assert result.source == "fallback"


class TestListInput:

    def test_first_element_wins(self):
        result = resolve(["cover-images/u1/a.jpg", "cover-images/u1/b.jpg"])
        assert result.url == f"{BASE}/cover-images/u1/a.jpg"
        assert result.original_input == "cover-images/u1/a.jpg,cover-images/u1/b.jpg"

    def test_tuple(self):
        assert resolve(("https://x.test/a.jpg",)).url == "https://x.test/a.jpg"

    def test_element_is_sanitized(self):
        assert resolve(['["https://x.test/a.jpg"]']).url == "https://x.test/a.jpg"


class TestProperties:

    @given(corrupted_references())
    def test_corruption_resolves_like_clean_value(self, pair):
        base, raw = pair
        assert resolve(raw).url == resolve(base).url

    @given(corrupted_references())
    def test_idempotent(self, pair):
        _, raw = pair
        first = resolve(raw)
        assert first.source != "fallback"
        assert resolve(first.url).url == first.url

    @given(st.one_of(
        st.none(),
        st.text(),
        st.lists(st.text()),
        st.integers(),
        st.dictionaries(st.text(), st.text()),
    ))
    def test_total(self, raw):
        result = resolve(raw)
        assert isinstance(result.url, str) and result.url
        assert isinstance(result.is_valid, bool)
        assert result.source in ("supabase", "external", "local", "fallback")
        assert isinstance(result.original_input, str)
        assert result.is_valid == (result.url != FALLBACK)


def test_resolve_url_shortcut():
    assert resolve_url("avatars/u1/a.jpg") == f"{BASE}/avatars/u1/a.jpg"
    assert resolve_url(None) == FALLBACK


def test_clean_reference():
    assert clean_reference(' ["cover-images/a.jpg"] ') == "cover-images/a.jpg"


def test_stringify_input():
    assert stringify_input(["a", "b"]) == "a,b"
    assert stringify_input(None) == "None"


class TestBrokenContainers:

    def test_extra_closing_brace_is_dropped(self):
        raw = '{"url":"' + SUPABASE_URL + '"}}'
        result = resolve(raw)
        assert result.url == SUPABASE_URL
        assert result.source == "supabase"

    def test_unparsed_object_text_keeps_no_braces(self):
        result = resolve("{https://x.test/a.jpg}")
        assert result.url == "https://x.test/a.jpg"

    @pytest.mark.parametrize("raw", ["https://", "[https://]", "http://", "//", "https://?q=1", '["https:///"]'])
    def test_url_without_host_falls_back(self, raw):
        result = resolve(raw)
        assert result.url == FALLBACK
        assert result.source == "fallback"
        assert not result.is_valid

    def test_supabase_host_without_storage_marker_falls_back(self):
        # Host plus bucket path, no /storage/v1/object/public/ segment
        assert resolve("proj.supabase.co/post-media/x.jpg").source == "fallback"


class TestPostCover:

    def test_cover_images_first(self):
        post = {"cover_images": ["cover-images/u1/a.jpg"], "featured_image_url": "https://x.test/old.jpg"}
        assert resolve_post_cover(post).url == f"{BASE}/cover-images/u1/a.jpg"

    @pytest.mark.parametrize("cover", [None, "", [], "[]", "junk"])
    def test_falls_back_to_featured_image(self, cover):
        post = {"cover_images": cover, "featured_image_url": "https://x.test/old.jpg"}
        result = resolve_post_cover(post)
        assert result.url == "https://x.test/old.jpg"
        assert result.source == "external"
        assert result.original_input == "https://x.test/old.jpg"

    def test_neither_field_resolves(self):
        result = resolve_post_cover({"cover_images": "junk", "featured_image_url": "also junk"})
        assert result.url == FALLBACK
        assert result.source == "fallback"
        assert result.original_input == "also junk"

    def test_empty_post(self):
        result = resolve_post_cover({})
        assert result.url == FALLBACK
        assert result.original_input == "None"

    def test_custom_fallback(self):
        assert resolve_post_cover({}, "/assets/x.png").url == "/assets/x.png"

    @pytest.mark.parametrize("post", [None, "cover-images/a.jpg", ["x"]])
    def test_non_dict_post(self, post):
        assert resolve_post_cover(post).source == "fallback"
