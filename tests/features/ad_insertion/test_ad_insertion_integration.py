import pytest

from clipwork.core.errors import ValidationError
from clipwork.features.ad_insertion.service.api import insert_ad_into_video


def test_ad_splice_duration_and_content_order(make_clip, color_at, isolated_temp_root, tmp_path):
    """
    main 20s (red), ad (blue) trimmed to 5s, inserted after 10s:
    ~25s of red[0,10) ++ blue[0,5) ++ red[10,20).
    """
    main = make_clip("main.mp4", duration=20, color="red")
    ad = make_clip("ad.mp4", duration=8, color="blue")
    out = tmp_path / "spliced.mp4"

    result = insert_ad_into_video(main, ad, 10, out, ad_duration_seconds=5)

    assert out.exists()
    assert result.duration_seconds == pytest.approx(25.0, abs=0.5)
    assert [color_at(out, t) for t in (5.0, 12.5, 20.0)] == ["red", "blue", "red"]
    assert list(isolated_temp_root.iterdir()) == []


def test_swap_roles(make_clip, color_at, isolated_temp_root, tmp_path):
    long_red = make_clip("long.mp4", duration=6, color="red")
    short_blue = make_clip("short.mp4", duration=4, color="blue")
    out = tmp_path / "swapped.mp4"

    # blue becomes the main clip, the whole red clip the ad
    result = insert_ad_into_video(long_red, short_blue, 2, out, swap_roles=True)

    assert result.duration_seconds == pytest.approx(10.0, abs=0.5)
    assert [color_at(out, t) for t in (1.0, 5.0, 9.0)] == ["blue", "red", "blue"]


def test_invalid_insertion_point_creates_nothing(make_clip, isolated_temp_root, tmp_path):
    main = make_clip("main.mp4", duration=4)
    ad = make_clip("ad.mp4", duration=2)
    out = tmp_path / "spliced.mp4"

    with pytest.raises(ValidationError):
        insert_ad_into_video(main, ad, 5, out)

    assert not out.exists()
    assert list(isolated_temp_root.iterdir()) == []
