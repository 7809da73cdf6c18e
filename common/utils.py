import logging
import os
import warnings
from pathlib import Path
from typing import Iterable, Optional, Sequence, Union

import pandas as pd


def setup_logging(stage_name: str, log_file: str, level=logging.INFO):
    """Configure logging for a module.

    Args:
        stage_name: Name for the logger (typically __name__)
        log_file: Path to the log file to write to
        level: Logging level (default: INFO)

    Returns:
        Configured logger instance
    """
    logger = logging.getLogger(stage_name)
    logger.handlers.clear()

    # Disable propagation to root logger to prevent duplicate logging
    logger.propagate = False

    logger.setLevel(level)

    Path(log_file).parent.mkdir(parents=True, exist_ok=True)

    # File Handler
    file_handler = logging.FileHandler(log_file, mode="a", encoding="utf-8")
    file_handler.setFormatter(logging.Formatter("%(asctime)s [%(levelname)s] %(name)s: %(message)s"))
    logger.addHandler(file_handler)

    return logger


def safe_read_csv(source, delimiter: str = ",") -> pd.DataFrame:
    """Safely read a delimited source with a header row, every cell as a string.

    `source` may be a filesystem path or a readable text stream.
    """
    if isinstance(source, (str, os.PathLike)) and not os.path.exists(source):
        raise FileNotFoundError(f"File not found: {source}")

    try:
        # Rows wider than the header are kept and pandas drops their trailing fields
        with warnings.catch_warnings():
            warnings.simplefilter("ignore", pd.errors.ParserWarning)
            return pd.read_csv(
                source,
                sep=delimiter,
                engine="python",
                on_bad_lines=lambda fields: fields,
                dtype=str,
                keep_default_na=False,
                skipinitialspace=True,
                index_col=False,
            )
    except pd.errors.ParserError as e:
        raise pd.errors.ParserError(f"Error parsing {describe_source(source)}: {e}")


def records_to_frame(records: Iterable[Sequence]) -> pd.DataFrame:
    """Build a string DataFrame from pre-parsed records whose first record is the header."""
    rows = [list(r) for r in records]
    if not rows:
        return pd.DataFrame()

    header, body = rows[0], rows[1:]
    width = max([len(header)] + [len(r) for r in body])
    columns = [str(c) for c in header] + [f"extra_{i}" for i in range(len(header), width)]
    # Short records are padded with None so validation sees the missing fields
    padded = [r + [None] * (width - len(r)) for r in body]
    return pd.DataFrame(padded, columns=columns, dtype=object)


def describe_source(source: Union[str, os.PathLike, object]) -> str:
    """Human-readable name for an ingestion source."""
    if isinstance(source, (str, os.PathLike)):
        return str(source)
    name: Optional[str] = getattr(source, "name", None)
    if isinstance(name, str):
        return name
    return f"<{type(source).__name__}>"
