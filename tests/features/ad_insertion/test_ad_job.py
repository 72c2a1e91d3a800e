from pathlib import Path

import pytest

from clipwork.core.errors import ValidationError
from clipwork.core.shared_types import MediaClip
from clipwork.features.ad_insertion.domain.models import AdInsertionJob


def _clip(name, duration):
    return MediaClip(path=Path(f"/videos/{name}"), duration_seconds=duration, frame_rate=30.0,
                     resolution=(320, 240), video_codec_tag="h264", has_audio=True, audio_codec_tag="aac")


MAIN = _clip("main.mp4", 20.0)
AD = _clip("ad.mp4", 8.0)


def test_valid_job_and_expected_duration():
    job = AdInsertionJob(MAIN, AD, insert_after_seconds=10, ad_duration_seconds=5)

    assert job.cut_points() == [10]
    assert job.expected_duration == pytest.approx(25.0)


def test_ad_duration_defaults_to_full_ad():
    job = AdInsertionJob(MAIN, AD, insert_after_seconds=10)

    assert job.ad_duration_seconds == pytest.approx(8.0)
    assert job.expected_duration == pytest.approx(28.0)


@pytest.mark.parametrize("insert_after", [0, 20, 25, -3])
def test_insertion_point_must_be_inside_main(insert_after):
    with pytest.raises(ValidationError):
        AdInsertionJob(MAIN, AD, insert_after_seconds=insert_after, ad_duration_seconds=5)


@pytest.mark.parametrize("ad_duration", [0, 9, -1])
def test_ad_duration_must_fit_the_ad(ad_duration):
    with pytest.raises(ValidationError):
        AdInsertionJob(MAIN, AD, insert_after_seconds=10, ad_duration_seconds=ad_duration)


def test_sub_second_boundaries_are_rejected():
    with pytest.raises(ValidationError, match="whole seconds"):
        AdInsertionJob(MAIN, AD, insert_after_seconds=10.5, ad_duration_seconds=5)
    with pytest.raises(ValidationError, match="whole seconds"):
        AdInsertionJob(MAIN, AD, insert_after_seconds=10, ad_duration_seconds=2.25)


def test_repeat_inserts_after_every_interval():
    job = AdInsertionJob(MAIN, AD, insert_after_seconds=6, ad_duration_seconds=2, repeat=True)

    assert job.cut_points() == [6, 12, 18]
    assert job.expected_duration == pytest.approx(26.0)


def test_repeat_skips_a_cut_at_the_very_end():
    job = AdInsertionJob(MAIN, AD, insert_after_seconds=5, ad_duration_seconds=2, repeat=True)

    # A cut at 20s would leave no main content after the last ad
    assert job.cut_points() == [5, 10, 15]


def test_swapped_exchanges_roles():
    job = AdInsertionJob(_clip("long.mp4", 30.0), _clip("short.mp4", 12.0), insert_after_seconds=6,
                         ad_duration_seconds=4)

    swapped = job.swapped()

    assert swapped.main_clip.path.name == "short.mp4"
    assert swapped.ad_clip.path.name == "long.mp4"
    assert swapped.ad_duration_seconds == pytest.approx(30.0)


def test_swapped_is_revalidated():
    job = AdInsertionJob(MAIN, _clip("tiny_ad.mp4", 3.0), insert_after_seconds=10)

    with pytest.raises(ValidationError):
        job.swapped()
