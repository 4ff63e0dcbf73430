from datetime import datetime
from typing import Literal

from pydantic import BaseModel, ConfigDict, Field, computed_field

Unit = Literal["byte", "char"]
TrailingLine = Literal["evaluate", "drop"]
CheckName = Literal["content", "sizes", "corruption"]


class ContentResult(BaseModel):
    line_count: int  # newline count of the input
    input_bytes: int
    output_bytes: int
    distinct_symbols: int
    unit: Unit = "byte"


class CorruptLine(BaseModel):
    path: str
    line_number: int  # 1-based within path
    content: str


class CorruptionResult(BaseModel):
    corrupt_count: int = 0
    lines_checked: int = 0
    corrupt_lines: list[CorruptLine] = []
    per_file: dict[str, int] = {}
    trailing_line: TrailingLine = "evaluate"
    dropped_trailing: int = 0  # partial final lines skipped under "drop"


class ShardSize(BaseModel):
    path: str
    size: int
    exists: bool


class BalanceResult(BaseModel):
    input_size: int
    output_size: int
    expected_average: int
    distance: int
    imbalance_percent: int
    shards: list[ShardSize] = []


class VerificationConfig(BaseModel):
    """Everything one verification run needs, passed explicitly to each call."""

    model_config = ConfigDict(frozen=True)

    input_path: str
    output_paths: list[str]
    pattern: str | None = None
    max_corruption_percent: float = 3.0
    max_imbalance_percent: int = 10
    trailing_line: TrailingLine = "evaluate"
    unit: Unit = "byte"
    encoding: str = "utf-8"
    checks: list[CheckName] = ["content", "sizes", "corruption"]
    expect_absent: list[str] = []
    chunk_size: int = Field(default=64 * 1024, gt=0)
    max_diagnostics: int = Field(default=1000, ge=0)


class VerificationReport(BaseModel):
    run_id: str
    started_at: datetime
    finished_at: datetime | None = None
    config: VerificationConfig
    content: ContentResult | None = None
    balance: BalanceResult | None = None
    corruption: CorruptionResult | None = None
    corruption_percent: float | None = None
    failures: list[str] = []
    skipped_checks: list[CheckName] = []

    @computed_field  # type: ignore[prop-decorator]
    @property
    def passed(self) -> bool:
        return not self.failures
