import logging
import shutil
import tempfile
from pathlib import Path
from typing import List, Optional
from uuid import uuid4

from clipwork.core.config.settings import settings

logger = logging.getLogger(__name__)


class TempWorkspace:
    """
    Per-job scratch directory that owns every intermediate artifact.

    Use as a context manager: the directory and all registered files are
    removed on exit, whether the job succeeded or raised. Artifacts that
    must survive are moved out with publish() first.
    """

    def __init__(self, job_name: str = "job", root: Optional[Path] = None):
        self.job_name = job_name
        self.root = Path(root) if root else settings.TEMP_ROOT
        self.path: Optional[Path] = None
        self._artifacts: List[Path] = []
        self._counter = 0

    def __enter__(self) -> "TempWorkspace":
        self.root.mkdir(parents=True, exist_ok=True)
        self.path = Path(tempfile.mkdtemp(prefix=f"clipwork-{self.job_name}-{uuid4().hex[:8]}-", dir=self.root))
        logger.debug(f"Workspace created: {self.path}")
        return self

    def __exit__(self, exc_type, exc, tb):
        self.cleanup()
        return False

    @property
    def artifacts(self) -> List[Path]:
        return list(self._artifacts)

    def new_path(self, stage: str, suffix: str) -> Path:
        """Reserves a unique artifact path for a stage and registers it."""
        if self.path is None:
            raise RuntimeError("Workspace is not open. Use it as a context manager.")
        self._counter += 1
        artifact = self.path / f"{self._counter:03d}_{stage}{suffix}"
        self._artifacts.append(artifact)
        return artifact

    def discard(self, artifact: Path) -> None:
        """Deletes one artifact early (e.g. a part already consumed by concat)."""
        artifact = Path(artifact)
        artifact.unlink(missing_ok=True)
        if artifact in self._artifacts:
            self._artifacts.remove(artifact)

    def publish(self, artifact: Path, destination: Path) -> Path:
        """
        Moves a validated artifact to the caller's output path.
        Only call after the stage that produced it has been verified.
        """
        destination = Path(destination)
        destination.parent.mkdir(parents=True, exist_ok=True)
        shutil.move(str(artifact), str(destination))
        if Path(artifact) in self._artifacts:
            self._artifacts.remove(Path(artifact))
        logger.info(f"Published {destination}")
        return destination

    def cleanup(self) -> None:
        for artifact in self._artifacts:
            try:
                artifact.unlink(missing_ok=True)
            except OSError as e:
                logger.warning(f"Could not delete artifact {artifact}: {e}")
        self._artifacts.clear()

        if self.path is not None and self.path.exists():
            shutil.rmtree(self.path, ignore_errors=True)
            logger.debug(f"Workspace removed: {self.path}")
