"""Size accounting and balance across shards."""

from pathlib import Path
from typing import Sequence

from ..core.logging import log
from ..core.models import BalanceResult, ShardSize
from .content import check_paths
from .errors import EmptyOrMissingInput, SizeMismatch
from .sources import PathLike, file_size


def verify_log_sizes(input_path: PathLike, output_paths: Sequence[PathLike]) -> BalanceResult:
    """
    Check the shard sizes add up to the input and score how evenly they split it.

    The imbalance is the mean absolute deviation from an even split, as an
    integer percentage of the even share. The even share is floored to 1 for
    inputs smaller than the shard count, which inflates the figure for tiny
    files.
    """
    check_paths(input_path, output_paths)

    input_size = file_size(input_path)
    if input_size == 0:
        log.error("sizes.input_empty", path=str(input_path))
        raise EmptyOrMissingInput(str(input_path))
    log.info("sizes.start", input=str(input_path), input_size=input_size)

    total_targets = len(output_paths)
    expected_average = input_size // total_targets
    if expected_average == 0:
        expected_average = 1

    shards = [
        ShardSize(path=str(p), size=file_size(p), exists=Path(p).exists())
        for p in output_paths
    ]
    distance = sum(abs(s.size - expected_average) for s in shards)
    output_size = sum(s.size for s in shards)

    if output_size != input_size:
        log.error("sizes.mismatch", input_size=input_size, output_size=output_size)
        raise SizeMismatch(input_size, output_size)

    imbalance = ((distance * 100) // expected_average) // total_targets
    log.info(
        "sizes.computed",
        distance=distance,
        expected_average=expected_average,
        total_targets=total_targets,
        imbalance_percent=imbalance,
    )
    return BalanceResult(
        input_size=input_size,
        output_size=output_size,
        expected_average=expected_average,
        distance=distance,
        imbalance_percent=imbalance,
        shards=shards,
    )
