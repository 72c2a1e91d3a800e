import logging
from dataclasses import replace
from pathlib import Path
from typing import Optional, Union

from clipwork.core.cancellation import CancellationToken
from clipwork.core.shared_types import MediaClip, MediaFile
from clipwork.core.workspace import TempWorkspace
from clipwork.features.probing.service.api import probe_clip
from ..domain.models import AdInsertionJob, SpliceOutcome
from .engine import AdSpliceEngine

logger = logging.getLogger(__name__)


def insert_ad(job: AdInsertionJob,
              output_path: Union[str, Path],
              cancel_token: Optional[CancellationToken] = None,
              engine: Optional[AdSpliceEngine] = None) -> SpliceOutcome:
    """
    Public Service API: run the splice state machine and publish the result.

    Pipeline failures come back inside the outcome (state FAILED) rather
    than being raised. The temp workspace is gone either way when this
    returns. Blocks on ffmpeg; offload it from UI threads.
    """
    output = MediaFile(Path(output_path))
    engine = engine or AdSpliceEngine()

    with TempWorkspace("ad_insert") as workspace:
        outcome = engine.run(job, workspace, suffix=output.path.suffix or ".mp4", cancel_token=cancel_token)
        if outcome.succeeded:
            published = workspace.publish(outcome.output.path, output.path)
            outcome.output = replace(outcome.output, path=published)

    return outcome


def insert_ad_into_video(main_path: Union[str, Path],
                         ad_path: Union[str, Path],
                         insert_after_seconds: int,
                         dest_path: Union[str, Path],
                         ad_duration_seconds: Optional[int] = None,
                         repeat: bool = False,
                         swap_roles: bool = False,
                         allow_normalize: bool = True,
                         cancel_token: Optional[CancellationToken] = None) -> MediaClip:
    """
    Public Service API taking primitives. Raises the failing stage's error
    instead of returning an outcome.
    """
    main = probe_clip(main_path)
    ad = probe_clip(ad_path)
    if swap_roles:
        main, ad = ad, main

    job = AdInsertionJob(
        main_clip=main,
        ad_clip=ad,
        insert_after_seconds=insert_after_seconds,
        ad_duration_seconds=ad_duration_seconds,
        repeat=repeat,
        allow_normalize=allow_normalize
    )
    logger.info(f"Inserting {ad.path.name} into {main.path.name} after {insert_after_seconds}s "
                f"(cuts at {job.cut_points()})")

    outcome = insert_ad(job, dest_path, cancel_token)
    if not outcome.succeeded:
        raise outcome.error
    return outcome.output
