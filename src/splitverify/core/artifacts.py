from datetime import datetime, timezone
from pathlib import Path
from typing import Optional
import uuid
from . import paths
from .config import Settings


def new_run_id() -> str:
    return f"{datetime.now(timezone.utc).strftime('%Y-%m-%d_%H%M%S')}_{uuid.uuid4().hex[:4]}"


def phase_dir(run_id: str, phase: str, settings: Optional[Settings] = None) -> Path:
    p = paths.runs(settings) / run_id / phase
    p.mkdir(parents=True, exist_ok=True)
    return p
