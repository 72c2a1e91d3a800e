# File: clipwork/core/config/settings.py

import os
import shutil
import tempfile
from pathlib import Path


class Settings:
    # --- Paths ---
    # clipwork/core/config/settings.py -> clipwork/core/config -> clipwork/core -> clipwork -> ROOT
    BASE_DIR: Path = Path(__file__).resolve().parent.parent.parent.parent
    DATA_DIR: Path = Path(os.getenv("CLIPWORK_DATA_DIR", str(BASE_DIR / "data")))
    # Every job creates its own sub-directory under this root
    TEMP_ROOT: Path = Path(os.getenv("CLIPWORK_TEMP_ROOT", tempfile.gettempdir()))

    # --- Database (job ledger) ---
    POSTGRES_USER: str = os.getenv("POSTGRES_USER", "postgres")
    POSTGRES_PASSWORD: str = os.getenv("POSTGRES_PASSWORD", "password")
    POSTGRES_SERVER: str = os.getenv("POSTGRES_SERVER", "localhost")
    POSTGRES_PORT: str = os.getenv("POSTGRES_PORT", "5432")
    POSTGRES_DB: str = os.getenv("POSTGRES_DB", "clipwork_db")

    @property
    def DATABASE_URL(self) -> str:
        explicit = os.getenv("DATABASE_URL")
        if explicit:
            return explicit

        if os.getenv("USE_POSTGRES", "false").lower() == "true":
            return f"postgresql://{self.POSTGRES_USER}:{self.POSTGRES_PASSWORD}@{self.POSTGRES_SERVER}:{self.POSTGRES_PORT}/{self.POSTGRES_DB}"

        # Default: a local SQLite ledger next to the data directory
        return f"sqlite:///{self.DATA_DIR / 'clipwork.db'}"

    # --- External Tools ---
    # Auto-detect ffmpeg/ffprobe or use env var
    FFMPEG_BINARY: str = os.getenv("FFMPEG_BINARY_PATH", shutil.which("ffmpeg") or "ffmpeg")
    FFPROBE_BINARY: str = os.getenv("FFPROBE_BINARY_PATH", shutil.which("ffprobe") or "ffprobe")

    # Seconds before a single ffmpeg/ffprobe invocation is killed. 0 disables the limit.
    PROCESS_TIMEOUT_SECONDS: float = float(os.getenv("PROCESS_TIMEOUT_SECONDS", "600"))

    # --- Pipeline ---
    # Run the frame transcoder and the audio retimer side by side
    PARALLEL_STAGES: bool = os.getenv("PARALLEL_STAGES", "false").lower() == "true"
    MAX_MERGE_CLIPS: int = int(os.getenv("MAX_MERGE_CLIPS", "6"))
    ALLOWED_EXTENSIONS: tuple = (".mp4", ".avi", ".mov")

    # --- Encoding ---
    VIDEO_FOURCC: str = os.getenv("VIDEO_FOURCC", "mp4v")
    AUDIO_CODEC: str = "aac"
    AUDIO_BITRATE: str = os.getenv("AUDIO_BITRATE", "192k")
    AUDIO_SAMPLE_RATE: int = 48000

    # --- Logging ---
    LOG_LEVEL: str = os.getenv("LOG_LEVEL", "INFO")

    def ensure_dirs(self):
        """Creates necessary data directories if they don't exist."""
        self.DATA_DIR.mkdir(parents=True, exist_ok=True)
        self.TEMP_ROOT.mkdir(parents=True, exist_ok=True)


settings = Settings()
