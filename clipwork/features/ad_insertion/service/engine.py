import logging
from typing import Callable, List, Optional

from clipwork.core.cancellation import CancellationToken, check_cancelled
from clipwork.core.errors import ClipworkError
from clipwork.core.shared_types import MediaClip
from clipwork.core.workspace import TempWorkspace
from clipwork.features.merging.service.api import concatenate
from ..domain.interfaces import IStreamTrimmer
from ..domain.models import AdInsertionJob, SpliceOutcome, SpliceState
from ..data.ffmpeg_adapter import FFmpegStreamTrimmer

logger = logging.getLogger(__name__)

Concatenate = Callable[..., MediaClip]


class AdSpliceEngine:
    """
    Split -> Trim -> Concat, no retries.

    Every artifact lands in the caller's workspace, so a FAILED outcome
    leaves nothing behind once the workspace closes.
    """

    def __init__(self, trimmer: Optional[IStreamTrimmer] = None, concat: Optional[Concatenate] = None):
        self.trimmer = trimmer or FFmpegStreamTrimmer()
        self.concat = concat or concatenate

    def run(self, job: AdInsertionJob, workspace: TempWorkspace, suffix: str = ".mp4",
            cancel_token: Optional[CancellationToken] = None) -> SpliceOutcome:
        outcome = SpliceOutcome()
        try:
            outcome.enter(SpliceState.SPLIT)
            check_cancelled(cancel_token, SpliceState.SPLIT.value)
            main_parts = self._split(job, workspace, suffix)

            outcome.enter(SpliceState.TRIM)
            check_cancelled(cancel_token, SpliceState.TRIM.value)
            ad = self.trimmer.trim(job.ad_clip, 0, job.ad_duration_seconds,
                                   workspace.new_path("ad_trim", suffix))

            outcome.enter(SpliceState.CONCAT)
            check_cancelled(cancel_token, SpliceState.CONCAT.value)
            sequence = self._interleave(main_parts, ad)
            outcome.output = self.concat(sequence, workspace, job.allow_normalize,
                                         suffix=suffix, cancel_token=cancel_token)

            outcome.enter(SpliceState.COMPLETED)
            drift = outcome.output.duration_seconds - job.expected_duration
            logger.info(f"Ad splice completed: {outcome.output.duration_seconds:.3f}s "
                        f"(expected {job.expected_duration:.3f}s, drift {drift:+.3f}s)")

        except ClipworkError as e:
            failed_in = outcome.state
            outcome.error = e
            outcome.output = None
            outcome.enter(SpliceState.FAILED)
            logger.error(f"Ad splice failed during {failed_in.value}: {e}")

        return outcome

    def _split(self, job: AdInsertionJob, workspace: TempWorkspace, suffix: str) -> List[MediaClip]:
        """Cuts the main clip at every insertion point into consecutive parts."""
        bounds = [0] + job.cut_points() + [None]
        parts = []
        for idx, (start, end) in enumerate(zip(bounds, bounds[1:]), start=1):
            part = workspace.new_path(f"main_part_{idx:02d}", suffix)
            parts.append(self.trimmer.trim(job.main_clip, start, end, part))
        return parts

    @staticmethod
    def _interleave(main_parts: List[MediaClip], ad: MediaClip) -> List[MediaClip]:
        sequence = [main_parts[0]]
        for part in main_parts[1:]:
            sequence += [ad, part]
        return sequence
