import logging
from dataclasses import replace
from pathlib import Path
from typing import List, Optional, Sequence, Union

from clipwork.core.cancellation import CancellationToken, check_cancelled
from clipwork.core.errors import EncodeError, FormatMismatch
from clipwork.core.shared_types import MediaClip, MediaFile
from clipwork.core.workspace import TempWorkspace
from clipwork.features.probing.service.api import probe_clip, verify_video_artifact
from ..domain.models import MergeJob, find_incompatibilities, validate_clip_count, validate_orders
from ..data.ffmpeg_adapter import FFmpegConcatenator

logger = logging.getLogger(__name__)


def concatenate(clips: Sequence[MediaClip],
                workspace: TempWorkspace,
                allow_normalize: bool = True,
                suffix: str = ".mp4",
                cancel_token: Optional[CancellationToken] = None) -> MediaClip:
    """
    Joins clips in the given sequence into one artifact inside the workspace.

    The stream-copy path is only taken after every clip has been checked
    against the first one. Incompatible clips are re-encoded to a common
    profile, or rejected with FormatMismatch when normalization is off.
    """
    adapter = FFmpegConcatenator()
    parts: List[Path] = [c.path for c in clips]
    durations: Optional[List[Optional[float]]] = None

    problems = find_incompatibilities(clips)
    if problems:
        if not allow_normalize:
            raise FormatMismatch(
                "Clips cannot be stream-copied together: " + "; ".join(problems),
                stage="concat_check", problems=problems
            )

        logger.warning(f"Normalizing {len(clips)} clips before concat: {'; '.join(problems)}")
        reference = clips[0]
        with_audio = any(c.has_audio for c in clips)
        parts, durations = [], []
        for idx, clip in enumerate(clips, start=1):
            check_cancelled(cancel_token, "normalize")
            normalized = workspace.new_path(f"normalized_{idx:02d}", ".mp4")
            adapter.normalize(clip, reference, with_audio, normalized)
            part = verify_video_artifact(normalized, "normalize", EncodeError)
            parts.append(normalized)
            durations.append(part.video_duration_seconds)

    check_cancelled(cancel_token, "concat")
    list_path = adapter.write_concat_list(parts, workspace.new_path("concat_list", ".txt"), durations)
    artifact = workspace.new_path("concat", suffix)
    adapter.concat_copy(list_path, artifact)

    result = verify_video_artifact(artifact, "concat", EncodeError)

    expected = sum(c.duration_seconds for c in clips)
    if abs(result.duration_seconds - expected) > 0.5:
        logger.warning(f"Concat duration {result.duration_seconds:.3f}s vs sum of parts {expected:.3f}s")

    logger.info(f"Concatenated {len(parts)} parts -> {artifact.name} ({result.duration_seconds:.3f}s)")
    return result


def merge(job: MergeJob,
          output_path: Union[str, Path],
          cancel_token: Optional[CancellationToken] = None) -> MediaClip:
    """
    Public Service API: concatenate the job's clips by their order values
    and publish the result to output_path.

    Blocks for every ffmpeg run; offload it from UI threads.
    """
    output = MediaFile(Path(output_path))
    clips = job.ordered_clips()
    logger.info("Merging in order: " + ", ".join(c.path.name for c in clips))

    with TempWorkspace("merge") as workspace:
        result = concatenate(clips, workspace, job.allow_normalize,
                             suffix=output.path.suffix or ".mp4", cancel_token=cancel_token)
        check_cancelled(cancel_token, "publish")
        published = workspace.publish(result.path, output.path)

    return replace(result, path=published)


def merge_videos(source_paths: Sequence[Union[str, Path]],
                 dest_path: Union[str, Path],
                 orders: Optional[Sequence[int]] = None,
                 allow_normalize: bool = True,
                 cancel_token: Optional[CancellationToken] = None) -> MediaClip:
    """
    Public Service API taking primitives. Orders default to list position.
    Order and count problems are rejected before any file is probed.
    """
    validate_clip_count(len(source_paths))
    if orders is None:
        orders = list(range(1, len(source_paths) + 1))
    validate_orders(list(orders))

    clips = [probe_clip(p) for p in source_paths]
    job = MergeJob.from_clips(clips, orders, allow_normalize)
    return merge(job, dest_path, cancel_token)
